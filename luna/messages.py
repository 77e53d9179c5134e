"""
Message envelope and invocation context.

Message
- The transport-neutral view of one incoming chat message: text payload plus the
  channel/author metadata the policy filter needs. The transport's own object
  travels along in `raw` and is only borrowed for the duration of dispatch.

InvocationContext
- What a handler receives: the message, the extracted parameters, the primary
  parameter, the resolved dependencies and the catalog it was resolved from.
  Built once per matched and validated message, discarded after the handler
  returns. Mappings are read-only views.
"""
from typing import NamedTuple, Any


class Message(NamedTuple):
    content: str
    channel: str
    author: str
    bot: bool = False
    raw: Any = None


class InvocationContext(NamedTuple):
    message: Message
    parameters: Any
    parameter: str | None
    dependencies: Any
    catalog: Any


__all__ = (
    "Message",
    "InvocationContext",
)
