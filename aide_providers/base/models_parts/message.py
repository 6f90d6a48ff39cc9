"""
Message DTO used in unified prompts.

``system`` messages carry plain text. The other roles carry an ordered tuple of
content parts; a bare string is accepted for convenience and normalized to a
single ``TextPart``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Literal, Sequence, Tuple, Union

from .content_part import ContentPart, FilePart, TextPart
from .result import CallWarning

# Message roles used in unified prompts.
Role = Literal["system", "user", "assistant", "tool"]

_ROLES = ("system", "user", "assistant", "tool")


@dataclass(frozen=True)
class Message:
    """A prompt message.

    Attributes:
        role: One of ``system``, ``user``, ``assistant``, ``tool``.
        content: Plain text, or an ordered sequence of content parts.

    Methods:
        parts: Content as a tuple of parts (text wrapped in a ``TextPart``).
        text: Concatenated text of all ``TextPart`` entries.
    """

    role: Role
    content: Union[str, Tuple[ContentPart, ...]]

    def __post_init__(self) -> None:
        if self.role not in _ROLES:
            raise ValueError(f"unknown message role: {self.role!r}")
        if not isinstance(self.content, str):
            object.__setattr__(self, "content", tuple(self.content))

    @classmethod
    def system(cls, text: str) -> "Message":
        return cls(role="system", content=text)

    @classmethod
    def user(cls, content: Union[str, Iterable[ContentPart]]) -> "Message":
        return cls(role="user", content=content if isinstance(content, str) else tuple(content))

    @classmethod
    def assistant(cls, content: Union[str, Iterable[ContentPart]]) -> "Message":
        return cls(role="assistant", content=content if isinstance(content, str) else tuple(content))

    @classmethod
    def tool(cls, parts: Iterable[ContentPart]) -> "Message":
        return cls(role="tool", content=tuple(parts))

    def parts(self) -> Sequence[ContentPart]:
        if isinstance(self.content, str):
            return (TextPart(self.content),)
        return self.content

    def text(self) -> str:
        if isinstance(self.content, str):
            return self.content
        return "".join(p.text for p in self.content if isinstance(p, TextPart))


Prompt = Sequence[Message]


def skipped_file_warnings(prompt: Prompt) -> List[CallWarning]:
    """Return one warning per non-image file part; neither family can send those."""
    return [
        CallWarning(type="other", message=f"file parts of media type {part.media_type} are not supported")
        for message in prompt
        if message.role == "user"
        for part in message.parts()
        if isinstance(part, FilePart) and not part.is_image
    ]


__all__ = ["Message", "Prompt", "Role", "skipped_file_warnings"]
