"""Insight backend over the Anthropic Messages API."""

from __future__ import annotations

import json
import os
import re
from collections.abc import Iterator, Sequence
from typing import Any

import anthropic
from pydantic import TypeAdapter, ValidationError

from notesynth.backend.base import Attachment
from notesynth.errors import (
    BackendError,
    ExtractionError,
    StreamingError,
    UnsupportedInputError,
)
from notesynth.models.config import BackendConfig
from notesynth.models.source import ChatRole, ChatTurn
from notesynth.utils.progress import log_step, log_warning
from notesynth.utils.retry import TRANSIENT_ERRORS, retry_api

STRUCTURED_SUFFIX = """

Return ONLY valid JSON, no markdown formatting. The JSON must conform to this JSON Schema:
{schema}"""

IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}
DOCUMENT_TYPES = {"application/pdf"}

RETRYABLE = TRANSIENT_ERRORS + (
    anthropic.APIConnectionError,
    anthropic.RateLimitError,
    anthropic.InternalServerError,
)


class AnthropicBackend:
    """One-shot structured extraction and streamed dialogues via Claude."""

    def __init__(
        self,
        config: BackendConfig | None = None,
        *,
        client: anthropic.Anthropic | None = None,
        api_key: str | None = None,
    ) -> None:
        self.config = config or BackendConfig()
        if client is None:
            api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
            if not api_key:
                raise BackendError(
                    "ANTHROPIC_API_KEY not set — the assistant and noteboard are unavailable."
                )
            client = anthropic.Anthropic(
                api_key=api_key,
                timeout=self.config.timeout_seconds,
                max_retries=0,  # retries are driven by retry_api
            )
        self._client = client

    def extract(self, prompt: str, shape: Any) -> Any:
        adapter = TypeAdapter(shape)
        content = [{"type": "text", "text": _structured_prompt(prompt, adapter)}]
        return _validate(adapter, self._complete(content))

    def extract_multimodal(self, prompt: str, attachment: Attachment, shape: Any) -> Any:
        adapter = TypeAdapter(shape)
        content = [
            _attachment_block(attachment),
            {"type": "text", "text": _structured_prompt(prompt, adapter)},
        ]
        return _validate(adapter, self._complete(content))

    def create_dialogue(
        self, system_instruction: str, history: Sequence[ChatTurn] = ()
    ) -> AnthropicDialogue:
        return AnthropicDialogue(
            self._client, self.config, system_instruction, history=history
        )

    def _complete(self, content: list[dict]) -> str:
        log_step("Backend", f"Requesting extraction ({self.config.model})")
        create = retry_api(self.config.max_attempts, exceptions=RETRYABLE)(
            self._client.messages.create
        )
        try:
            message = create(
                model=self.config.model,
                max_tokens=self.config.max_tokens,
                messages=[{"role": "user", "content": content}],
            )
        except anthropic.BadRequestError as e:
            if "support" in str(e).lower():
                raise UnsupportedInputError(
                    "The uploaded file type is not supported by the AI model."
                ) from e
            raise BackendError(f"Claude API rejected the request: {e}") from e
        except (anthropic.APIError, *TRANSIENT_ERRORS) as e:
            raise BackendError(f"Claude API error: {e}") from e

        if message.stop_reason == "max_tokens":
            log_warning("Extraction hit max_tokens; the response may be truncated")
        return "".join(b.text for b in message.content if b.type == "text")


class AnthropicDialogue:
    """A dialogue handle that remembers its own turns between calls."""

    def __init__(
        self,
        client: anthropic.Anthropic,
        config: BackendConfig,
        system_instruction: str,
        *,
        history: Sequence[ChatTurn] = (),
    ) -> None:
        self.system_instruction = system_instruction
        self._client = client
        self._config = config
        self._messages: list[dict] = _history_messages(history)

    @property
    def messages(self) -> list[dict]:
        return list(self._messages)

    def send_streaming(self, message: str) -> Iterator[str]:
        messages = _append_message(self._messages, "user", message)
        return self._stream(messages)

    def _stream(self, messages: list[dict]) -> Iterator[str]:
        parts: list[str] = []
        try:
            with self._client.messages.stream(
                model=self._config.model,
                max_tokens=self._config.max_tokens,
                system=self.system_instruction,
                messages=messages,
            ) as stream:
                for text in stream.text_stream:
                    parts.append(text)
                    yield text
        except (anthropic.APIError, *TRANSIENT_ERRORS) as e:
            raise StreamingError(f"The assistant stream failed: {e}") from e
        self._messages = _append_message(messages, "assistant", "".join(parts))


def _structured_prompt(prompt: str, adapter: TypeAdapter) -> str:
    schema = json.dumps(adapter.json_schema(), indent=2)
    return prompt + STRUCTURED_SUFFIX.format(schema=schema)


def _attachment_block(attachment: Attachment) -> dict:
    mime_type = attachment.mime_type.lower()
    source = {
        "type": "base64",
        "media_type": mime_type,
        "data": attachment.base64_data,
    }
    if mime_type in IMAGE_TYPES:
        return {"type": "image", "source": source}
    if mime_type in DOCUMENT_TYPES:
        return {"type": "document", "source": source}
    raise UnsupportedInputError(
        f"The uploaded file type ({attachment.mime_type}) is not supported by the AI model."
    )


def _parse_json(text: str) -> Any:
    """Parse JSON from an LLM response, handling common formatting issues."""
    text = text.strip()
    # Strip markdown code fences if present
    if text.startswith("```"):
        lines = [l for l in text.split("\n") if not l.strip().startswith("```")]
        text = "\n".join(lines)

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        match = re.search(r"[\[{].*[\]}]", text, re.DOTALL)
        if match:
            try:
                return json.loads(match.group())
            except json.JSONDecodeError:
                pass
    raise ExtractionError(
        "The AI returned a malformed response. This can happen with very complex "
        "documents. Please try again."
    )


def _validate(adapter: TypeAdapter, text: str) -> Any:
    data = _parse_json(text)
    try:
        return adapter.validate_python(data)
    except ValidationError as e:
        raise ExtractionError(
            f"The AI response did not match the expected shape ({e.error_count()} error(s))."
        ) from e


def _append_message(messages: list[dict], role: str, text: str) -> list[dict]:
    """Append a message, merging into the previous one when roles repeat."""
    if messages and messages[-1]["role"] == role:
        merged = f"{messages[-1]['content']}\n\n{text}"
        return messages[:-1] + [{"role": role, "content": merged}]
    return messages + [{"role": role, "content": text}]


def _history_messages(history: Sequence[ChatTurn]) -> list[dict]:
    """Convert finalized turns to API messages (must open with a user turn)."""
    messages: list[dict] = []
    for turn in history:
        if turn.pending or turn.failed or not turn.text:
            continue
        if not messages and turn.role is ChatRole.ASSISTANT:
            continue
        messages = _append_message(messages, turn.role.value, turn.text)
    return messages
