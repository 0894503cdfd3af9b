import dataclasses
import inspect
import logging
import typing

import sequent.constants

if typing.TYPE_CHECKING:
	import sequent.registry


logger = logging.getLogger(__name__)

ListenerType = typing.Callable[..., typing.Any]


@dataclasses.dataclass
class ListenerOutcome:

	"""
	The result of invoking one bound listener.

	A failure that was handed to the error channel is ``redirected`` and
	counts as handled. Only an unredirected failure stops a dispatch.
	"""

	error: typing.Optional[Exception] = None
	redirected: bool = False
	skipped: bool = False

	@property
	def failed (self) -> bool:

		"""True if the listener raised and nothing handled the error."""

		return self.error is not None and not self.redirected

	def raise_for_error (self) -> None:

		"""Re-raise the listener's own exception if it was not handled."""

		if self.failed:
			raise self.error  # type: ignore[misc]


class BoundListener:

	"""
	A registered listener together with its once/fired bookkeeping.

	Instances are what the registry stores and what the dispatcher awaits.
	They are also handed out by ``raw_listeners()`` for once entries, so
	awaiting one directly behaves exactly as it would during ``emit``: it
	runs at most once and removes itself from its emitter when it fires.
	"""

	def __init__ (
		self,
		owner: "sequent.registry.ListenerRegistry",
		event_name: typing.Hashable,
		listener: ListenerType,
		once: bool = False,
		pass_emitter: bool = False
	) -> None:

		self.owner = owner
		self.event_name = event_name
		self.listener = listener
		self.once = once
		self.pass_emitter = pass_emitter
		self.fired = False


	def __repr__ (self) -> str:

		return f"<BoundListener {self.event_name!r} {self.listener!r} once={self.once} fired={self.fired}>"


	@property
	def is_error_channel (self) -> bool:

		"""
		True for listeners of the reserved error event, whose errors are never redirected.
		"""

		return isinstance(self.event_name, str) and self.event_name == sequent.constants.LISTENER_ERROR_EVENT


	def matches (self, listener: typing.Any) -> bool:

		"""
		Compare against a raw listener reference.

		Equality rather than identity, so that ``obj.method`` matches a
		bound method registered earlier from the same object.
		"""

		return bool(self.listener == listener)


	async def invoke (self, *args: typing.Any) -> ListenerOutcome:

		"""
		Run the raw listener once, awaiting it if it returns an awaitable.

		Errors raised by the listener are returned in the outcome rather than
		raised. When the owner has listeners on the error channel the error is
		first emitted there and the outcome is marked as redirected. Errors
		raised by the error channel's own listeners are not caught here.
		"""

		if self.once and self.fired:
			return ListenerOutcome(skipped=True)

		self.fired = True

		if self.once:
			self.owner._discard_entry(self.event_name, self)

		call_args = (self.owner,) + args if self.pass_emitter else args

		try:
			result = self.listener(*call_args)

			if inspect.isawaitable(result):
				await result

		except Exception as exc:

			if self.is_error_channel or self.owner.listener_count(sequent.constants.LISTENER_ERROR_EVENT) == 0:
				return ListenerOutcome(error=exc)

			logger.debug(f"Listener {self.listener!r} for {self.event_name!r} raised {exc!r}, redirecting to {sequent.constants.LISTENER_ERROR_EVENT!r}")

			await self.owner.emit(sequent.constants.LISTENER_ERROR_EVENT, exc)

			return ListenerOutcome(error=exc, redirected=True)

		return ListenerOutcome()


	async def __call__ (self, *args: typing.Any) -> None:

		outcome = await self.invoke(*args)
		outcome.raise_for_error()


def wrap_listener (
	owner: "sequent.registry.ListenerRegistry",
	event_name: typing.Hashable,
	listener: ListenerType,
	once: bool = False,
	pass_emitter: bool = False
) -> BoundListener:

	"""
	Build the entry stored for a listener.

	Listeners of the error channel get the same wrapper; ``BoundListener``
	checks ``is_error_channel`` itself so their failures always propagate.
	"""

	return BoundListener(owner, event_name, listener, once=once, pass_emitter=pass_emitter)
