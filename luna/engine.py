"""
Luna engine: from a raw chat message to exactly one outcome.

Pipeline
    message
      → admissible()        policy: bots, our own identity, excluded channels
      → normalize()         whitespace, alias, alias-exempt channels
      → match()             descriptor + post-match text
      → repair()/extract()  arguments, leftover, missing
      → requirement gate    restricted descriptors only (silent veto)
      → validate()          arity
      → resolve()           dependencies
      → handler(context)    exactly once

Boundary
- process() never raises for a malformed message: a payload or channel that
  is not a string is dropped as Ignored("malformed"). Faults raised by the stages
  (see luna.faults) are caught here and become outcomes (see luna.outcomes);
  an exception from a handler becomes a Failed outcome and is logged.
- The engine keeps no per-message state on itself, the catalog is immutable,
  so a single engine may serve concurrent messages.
- Whatever a handler returns (an awaitable included) is handed back in
  Dispatched.result; the engine never awaits, cancels or retries it.
"""
import logging
from types import MappingProxyType

from .arity import validate
from .catalog import Catalog
from .config import Settings
from .extraction import extract, primary
from .faults import *
from .matcher import match
from .messages import Message, InvocationContext
from .outcomes import *
from .tokens import normalize, repair
from .utils import *

log = logging.getLogger(__name__)


def admissible(message, settings, identity=Unset, /):
    """
    Policy filter applied before normalization.

    Rejects messages written by bots, by the engine's own identity, or posted
    in an excluded channel.
    """
    if message.bot:
        return False
    if identity is not Unset and message.author == identity:
        return False
    if settings.excludes(message.channel):
        return False
    return True


class Engine:
    """
    Command resolution engine bound to one catalog and one set of settings.

    Parameters
    - catalog: Catalog
    - settings: Settings | Unset, defaults to Settings().
    - identity: str | Unset, author id of the bot itself; its messages are ignored.
    - gate: Callable[[Descriptor, Message], bool] | Unset, requirement gate for
      restricted descriptors; defaults to catalog.is_requirement_met (the
      owning module's requirement).
    """

    def __init__(self, catalog, settings=Unset, /, *, identity=Unset, gate=Unset):
        if not isinstance(catalog, Catalog):
            raise TypeError("engine 'catalog' must be a catalog")
        if not isinstance(settings := coalesce(settings, Settings()), Settings):
            raise TypeError("engine 'settings' must be settings")
        if not isinstance(identity, str | Unset):
            raise TypeError("engine 'identity' must be a string")
        if not callable(gate := coalesce(gate, catalog.is_requirement_met)):
            raise TypeError("engine 'gate' must be callable")

        self._catalog = catalog
        self._settings = settings
        self._identity = identity
        self._gate = gate

        log.info(
            "ready to serve with %s within %s",
            quantify(len(catalog), "command"),
            quantify(len(catalog.modules), "module"),
        )

    @property
    def catalog(self):
        return self._catalog

    @property
    def settings(self):
        return self._settings

    def process(self, message, /):
        """
        Run one message through the pipeline and return its outcome.

        Raises
        - TypeError: only when `message` is not a Message.
        """
        if not isinstance(message, Message):
            raise TypeError("process() argument must be a message")
        outcome = self._process(message)
        log.debug("%s → %s", message.content, type(outcome).__name__.lower())
        return outcome

    def _process(self, message):
        alias = self._settings.alias

        if not isinstance(message.content, str) or not isinstance(message.channel, str):
            log.warning("dropping malformed message from %r", message.author)
            return Ignored("malformed")

        if not admissible(message, self._settings, self._identity):
            return Ignored("filtered")

        if (text := normalize(message.content, self._settings, message.channel)) is None:
            return Ignored("not addressed")
        if not text:
            return Ignored("empty")

        try:
            descriptor, remainder = match(text, self._catalog, alias)
        except UnknownCommandError as fault:
            return Unmatched(fault, fault.options["keyword"])

        extraction = extract(repair(remainder), descriptor.required, descriptor.optional, descriptor.names)

        if descriptor.restricted and not self._allowed(descriptor, message):
            return Vetoed(RequirementNotMetError(
                "requirement of %r is not met" % descriptor.identifier,
                descriptor=descriptor,
                hint="this command is restricted",
            ), descriptor)

        try:
            validate(descriptor, extraction, alias)
        except MissingRequiredParameterError as fault:
            return MissingRequired(fault, descriptor, fault.options["missing"])
        except ExcessUnmatchedInputError as fault:
            return ExcessInput(fault, descriptor, fault.options["leftover"])

        context = InvocationContext(
            message=message,
            parameters=MappingProxyType(dict(extraction.arguments)),
            parameter=primary(descriptor, extraction, remainder),
            dependencies=self._catalog.resolve(descriptor.dependencies),
            catalog=self._catalog,
        )

        try:
            result = descriptor(context)
        except Exception as exception:
            log.exception("handler of %r failed", descriptor.identifier)
            return Failed(DelegatedCommandError(
                "something occurred in command %r" % descriptor.identifier,
                descriptor=descriptor,
                hint="check additional logs for more details",
                exception=exception,
            ), descriptor)

        return Dispatched(context, descriptor, result)

    def _allowed(self, descriptor, message):
        try:
            return bool(self._gate(descriptor, message))
        except Exception:
            log.exception("requirement gate of %r failed", descriptor.identifier)
            return False


__all__ = (
    "Engine",
    "admissible",
)
