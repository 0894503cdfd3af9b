import logging
import math
import typing

import sequent.bound_listener
import sequent.constants
import sequent.errors


logger = logging.getLogger(__name__)

# Distinguishes "no event name given" from an event literally named None.
_ALL_EVENTS = object()


class ListenerRegistry:

	"""
	Maps event names to ordered sequences of bound listeners.

	Event names can be any hashable value. The order of a sequence is the
	order listeners are dispatched in; it is set at registration time and
	never changed afterwards except by removal.

	The registry also dispatches: ``emit()`` lives here because every bound
	listener it creates may need to re-emit a failure on the error channel.
	``sequent.event_emitter.EventEmitter`` adds the named registration calls.
	"""

	def __init__ (self, max_listeners: typing.Optional[float] = None) -> None:

		"""
		Initialize an empty registry.

		Parameters:
			max_listeners: Diagnostic threshold. Registrations that take an
				event above this many listeners log a warning but are never
				refused. Defaults to ``sequent.constants.DEFAULT_MAX_LISTENERS``.
		"""

		self._listeners: typing.Dict[typing.Hashable, typing.List[sequent.bound_listener.BoundListener]] = {}
		self._max_listeners: float = sequent.constants.DEFAULT_MAX_LISTENERS

		if max_listeners is not None:
			self.set_max_listeners(max_listeners)


	def add_listener (
		self,
		event_name: typing.Hashable,
		listener: sequent.bound_listener.ListenerType,
		once: bool = False,
		prepend: bool = False,
		after: typing.Optional[sequent.bound_listener.ListenerType] = None,
		before: typing.Optional[sequent.bound_listener.ListenerType] = None,
		at: typing.Optional[int] = None,
		pass_emitter: bool = False
	) -> "ListenerRegistry":

		"""
		Register a listener, optionally at a specific position.

		Only one positioning strategy applies, in this order of precedence:
		``at`` (an index, with ``list.insert`` semantics), then ``prepend``,
		then ``after``/``before`` (relative to the first entry whose raw
		listener equals the target), then appending. If both ``after`` and
		``before`` are given, ``after`` is used. A target that is not
		registered for this event is not an error: the listener is appended.

		Parameters:
			event_name: Any hashable event key.
			listener: A sync or async callable.
			once: Remove the listener the first time it fires.
			prepend: Insert at the front of the sequence.
			after: Insert directly after this registered listener.
			before: Insert directly before this registered listener.
			at: Insert at this index.
			pass_emitter: Call the listener with the emitter as its first
				positional argument, ahead of the emitted arguments.

		Returns:
			The registry itself, for chaining.

		Raises:
			InvalidListenerType: If ``listener`` is not callable.
			OutOfRange: If ``at`` is not an integer.
		"""

		self._verify_listener_type(listener)

		if at is not None and (isinstance(at, bool) or not isinstance(at, int)):
			raise sequent.errors.OutOfRange("at", at)

		entries = self._listeners.setdefault(event_name, [])

		entry = sequent.bound_listener.wrap_listener(self, event_name, listener, once=once, pass_emitter=pass_emitter)

		index = self._resolve_position(entries, prepend=prepend, after=after, before=before, at=at)
		entries.insert(index, entry)

		self._check_max_listeners(event_name)

		return self


	def remove_listener (self, event_name: typing.Hashable, listener: sequent.bound_listener.ListenerType) -> "ListenerRegistry":

		"""
		Remove the first entry for ``listener`` on ``event_name``.

		Does nothing if the listener is not registered.
		"""

		entries = self._listeners.get(event_name)

		if not entries:
			return self

		for index, entry in enumerate(entries):

			if entry.matches(listener):
				del entries[index]
				break

		self._drop_if_empty(event_name)

		return self


	def remove_all_listeners (self, event_name: typing.Any = _ALL_EVENTS) -> "ListenerRegistry":

		"""
		Remove every listener, or only those of ``event_name`` when given.
		"""

		if event_name is _ALL_EVENTS:
			self._listeners = {}

		else:
			self._listeners.pop(event_name, None)

		return self


	async def emit (self, event_name: typing.Hashable, *args: typing.Any) -> None:

		"""
		Call every listener of an event in order, awaiting each in turn.

		The sequence is copied when ``emit()`` starts: listeners added while
		it runs are first called on the next ``emit()``, and a listener removed
		while it runs is still called this time unless it is a once listener
		that has already fired.

		Raises:
			Exception: The first listener error not handled by the
				``"listener-error"`` channel. Listeners after it are not called.
		"""

		entries = list(self._listeners.get(event_name, ()))

		for entry in entries:
			outcome = await entry.invoke(*args)
			outcome.raise_for_error()


	def listener_count (self, event_name: typing.Hashable) -> int:

		"""
		Return how many listeners are registered for an event.

		Once listeners are removed as they fire, so this is the number of
		listeners the next ``emit`` would run.
		"""

		return len(self._listeners.get(event_name, ()))


	def event_names (self) -> typing.List[typing.Hashable]:

		"""
		Return the events that currently have listeners, in first-registration order.
		"""

		return [name for name, entries in self._listeners.items() if entries]


	def raw_listeners (self, event_name: typing.Hashable) -> typing.List[sequent.bound_listener.ListenerType]:

		"""
		Return the listeners of an event in dispatch order.

		Ordinary listeners are returned as registered. Once listeners are
		returned as their ``BoundListener``, so calling one by hand still runs
		it at most once and unregisters it.
		"""

		return [entry if entry.once else entry.listener for entry in self._listeners.get(event_name, ())]


	def listeners (self, event_name: typing.Hashable) -> typing.List[sequent.bound_listener.ListenerType]:

		"""
		Return the raw listeners of an event in dispatch order, once listeners included.
		"""

		return [entry.listener for entry in self._listeners.get(event_name, ())]


	def set_max_listeners (self, n: float) -> "ListenerRegistry":

		"""
		Set the diagnostic threshold for listeners per event.

		Raises:
			OutOfRange: If ``n`` is not a finite, non-negative number.
		"""

		if isinstance(n, bool) or not isinstance(n, (int, float)) or not math.isfinite(n) or n < 0:
			raise sequent.errors.OutOfRange("n", n)

		self._max_listeners = n

		return self


	def get_max_listeners (self) -> float:

		"""
		Return the diagnostic threshold for listeners per event.
		"""

		return self._max_listeners


	def _discard_entry (self, event_name: typing.Hashable, entry: sequent.bound_listener.BoundListener) -> None:

		"""
		Remove one specific entry, matched by identity.

		Used by once listeners as they fire. An entry that was already removed
		(for example by ``remove_all_listeners``) is ignored.
		"""

		entries = self._listeners.get(event_name)

		if not entries:
			return

		for index, existing in enumerate(entries):

			if existing is entry:
				del entries[index]
				break

		self._drop_if_empty(event_name)


	def _drop_if_empty (self, event_name: typing.Hashable) -> None:

		if event_name in self._listeners and not self._listeners[event_name]:
			del self._listeners[event_name]


	@staticmethod
	def _resolve_position (
		entries: typing.List[sequent.bound_listener.BoundListener],
		prepend: bool,
		after: typing.Optional[sequent.bound_listener.ListenerType],
		before: typing.Optional[sequent.bound_listener.ListenerType],
		at: typing.Optional[int]
	) -> int:

		"""
		Work out the insertion index for a new entry.
		"""

		if at is not None:
			return at

		if prepend:
			return 0

		target = after if after is not None else before

		if target is not None:

			for index, entry in enumerate(entries):

				if entry.matches(target):
					return index + 1 if after is not None else index

		return len(entries)


	@staticmethod
	def _verify_listener_type (listener: typing.Any) -> None:

		if not callable(listener):
			raise sequent.errors.InvalidListenerType(listener)


	def _check_max_listeners (self, event_name: typing.Hashable) -> None:

		count = self.listener_count(event_name)

		if count > self._max_listeners:
			logger.warning(
				f"MaxListenersExceededWarning: Possible memory leak detected. "
				f"{count} {event_name!r} listeners added. Use set_max_listeners() to increase limit"
			)
