"""Error taxonomy shared by registry, matching, tasks and transport."""


class ReceptionistError(Exception):
    """Base class for all receptionist errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ReceptionistError):
    """Malformed or missing request parameters (e.g. no message body)."""


class TaskNotFoundError(ReceptionistError):
    """Unknown task id on get/cancel."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class SkillNotFoundError(ReceptionistError):
    """No registered agent advertises the requested skill id."""

    def __init__(self, skill_id: str | None):
        super().__init__(f"Skill not found: {skill_id}")
        self.skill_id = skill_id


class HandlerExecutionError(ReceptionistError):
    """A skill handler raised while being invoked."""

    def __init__(self, skill_id: str, cause: BaseException):
        super().__init__(str(cause))
        self.skill_id = skill_id
        self.__cause__ = cause


class PersistenceError(ReceptionistError):
    """The agent store could not be read or written."""


class TransportError(ReceptionistError):
    """A call to a remote agent failed or timed out."""


class DeserializationError(ReceptionistError):
    """A stored skill document could not be parsed."""
