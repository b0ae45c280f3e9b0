"""Skill handler that forwards invocations to a remote agent."""

from dataclasses import dataclass

from ..errors import TransportError
from ..models import Message, MessageSendParams, SendMessageRequest, Task, TextPart
from .client import IAgentTransport


@dataclass
class RemoteSkillHandler:
    """ISkillHandler for skills served at another agent's URL."""

    transport: IAgentTransport
    agent_url: str
    skill_id: str

    async def invoke(self, text: str) -> str:
        request = SendMessageRequest(
            params=MessageSendParams(
                message=Message(
                    role="user",
                    parts=[TextPart(text=text)],
                    context_id=self.skill_id,
                    metadata={"skillId": self.skill_id},
                )
            )
        )
        response = await self.transport.send_message(self.agent_url, request)

        if response.error is not None:
            raise TransportError(response.error.message)
        result = response.result
        if isinstance(result, Message):
            return result.first_text()
        if isinstance(result, Task):
            if "error" in result.metadata:
                raise TransportError(str(result.metadata["error"]))
            return str(result.metadata.get("result", ""))
        raise TransportError(f"Empty response from {self.agent_url}")
