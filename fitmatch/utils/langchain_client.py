"""LangChain chat client for the AI trainer (Anthropic Claude or Google Gemini)."""

import logging
from typing import Any, Dict, List, Optional

from langchain_anthropic import ChatAnthropic
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import BaseModel, Field

from fitmatch.config import AppConfig
from fitmatch.exceptions import ChatServiceError
from fitmatch.models.actions import ProposedAction
from fitmatch.utils.action_parser import parse_reply

logger = logging.getLogger(__name__)

CHAT_FAILED_MESSAGE = "The trainer is unavailable right now. Please try again in a moment."


class ChatReply(BaseModel):
    text: str
    actions: List[ProposedAction] = Field(default_factory=list)


def create_chat_model(config: AppConfig) -> Any:
    """
    Build the LangChain chat model for the configured provider.

    Raises:
        ChatServiceError: If no API key is configured
    """
    if not config.api_key:
        raise ChatServiceError(f"No API key configured for {config.chat_provider}")

    if config.chat_provider == "anthropic":
        return ChatAnthropic(
            model=config.resolved_model_name,
            anthropic_api_key=config.api_key,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )
    return ChatGoogleGenerativeAI(
        model=config.resolved_model_name,
        google_api_key=config.api_key,
        temperature=config.temperature,
        max_output_tokens=config.max_tokens,
    )


def _content_text(content: Any) -> str:
    """Flatten message content, which some providers return as a list of blocks."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for item in content:
            if isinstance(item, dict) and "text" in item:
                parts.append(item["text"])
            elif isinstance(item, str):
                parts.append(item)
        return "".join(parts)
    return str(content)


class TrainerChatClient:
    """Conversation with the trainer; replies are split into text and proposed actions."""

    def __init__(self, llm: Any, system_instruction: str, provider: str = "gemini") -> None:
        """
        Initialize the chat client.

        Args:
            llm: LangChain chat model, see ``create_chat_model()``
            system_instruction: System prompt with the user's context
            provider: 'anthropic' binds the system prompt with prompt caching,
                anything else sends it as a leading SystemMessage
        """
        self.llm = llm
        self.provider = provider
        self.history: List[Any] = []
        self.system_instruction = ""
        self.update_system_instruction(system_instruction)

    @classmethod
    def from_config(cls, config: AppConfig, system_instruction: str) -> "TrainerChatClient":
        client = cls(create_chat_model(config), system_instruction, provider=config.chat_provider)
        logger.info(f"Initialized {config.chat_provider} chat client with model: {config.resolved_model_name}")
        return client

    def update_system_instruction(self, system_instruction: str) -> None:
        """Replace the system prompt, e.g. after the profile or today's log changed."""
        self.system_instruction = system_instruction
        if self.provider == "anthropic":
            self.runnable = self.llm.bind(
                system=[
                    {
                        "type": "text",
                        "text": system_instruction,
                        "cache_control": {"type": "ephemeral"},
                    }
                ]
            )
        else:
            self.runnable = self.llm
        logger.debug(f"System instruction set ({len(system_instruction)} chars)")

    def start_chat(self, history: Optional[List[Dict[str, str]]] = None) -> None:
        """
        Start a new chat session with optional history.

        Args:
            history: Previous conversation in format
                [{"role": "user", "content": "..."}, {"role": "assistant", "content": "..."}]
        """
        self.history = []
        for msg in history or []:
            if msg["role"] == "user":
                self.history.append(HumanMessage(content=msg["content"]))
            elif msg["role"] == "assistant":
                self.history.append(AIMessage(content=msg["content"]))

        logger.info(f"Started chat with {len(self.history)} messages in history")

    def _messages(self) -> List[Any]:
        if self.provider == "anthropic":
            return list(self.history)
        return [SystemMessage(content=self.system_instruction), *self.history]

    def send_message(self, user_input: str) -> ChatReply:
        """
        Send a message and parse the trainer's reply.

        Args:
            user_input: User's message

        Returns:
            ChatReply with the display text and any proposed actions

        Raises:
            ChatServiceError: If the provider call fails; the history is left unchanged
        """
        self.history.append(HumanMessage(content=user_input))
        try:
            response = self.runnable.invoke(self._messages())
        except Exception as e:
            self.history.pop()
            logger.error(f"Chat request failed: {e}", exc_info=True)
            raise ChatServiceError(CHAT_FAILED_MESSAGE) from e

        text, actions = parse_reply(_content_text(response.content))
        self.history.append(AIMessage(content=text))

        usage = getattr(response, "response_metadata", {}).get("usage", {})
        if usage:
            logger.info(f"Usage stats: {usage}")
        if actions:
            logger.info(f"Trainer proposed actions: {[a.type for a in actions]}")

        return ChatReply(text=text, actions=actions)

    def get_history(self) -> List[Dict[str, str]]:
        """
        Get conversation history in simple format for storage.

        Returns:
            List of {"role": "user/assistant", "content": "..."} dicts
        """
        simple_history = []
        for msg in self.history:
            if isinstance(msg, HumanMessage):
                simple_history.append({"role": "user", "content": msg.content})
            elif isinstance(msg, AIMessage) and msg.content:
                simple_history.append({"role": "assistant", "content": msg.content})
        return simple_history
