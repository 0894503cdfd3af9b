import typing

import sequent.bound_listener
import sequent.registry

if typing.TYPE_CHECKING:
	import sequent.config


ListenerType = sequent.bound_listener.ListenerType


class EventEmitter (sequent.registry.ListenerRegistry):

	"""
	An event emitter that awaits its listeners one after another.

	Listeners run in registration order unless placed explicitly with
	``prepend_listener()``, ``before()``, ``after()`` or ``add_listener(at=...)``.
	Each listener is awaited before the next one starts, so a listener can
	rely on the side effects of the ones ahead of it.

	If a listener raises and the ``"listener-error"`` event has listeners,
	the error is emitted there and dispatch carries on. Otherwise the error
	propagates out of ``emit()`` and the remaining listeners are skipped.

	Example:
		```python
		emitter = sequent.EventEmitter()

		async def connect (url: str) -> None:
			...

		emitter.on("start", connect)
		emitter.prepend_listener("start", lambda url: print("starting", url))

		await emitter.emit("start", "tcp://localhost")
		```
	"""

	@classmethod
	def from_settings (cls, settings: "sequent.config.EmitterSettings") -> "EventEmitter":

		"""
		Create an emitter configured from loaded settings.
		"""

		return cls(max_listeners=settings.max_listeners)


	def on (self, event_name: typing.Hashable, listener: ListenerType) -> "EventEmitter":

		"""
		Append a listener for an event.
		"""

		self.add_listener(event_name, listener)
		return self

	def once (self, event_name: typing.Hashable, listener: ListenerType) -> "EventEmitter":

		"""
		Append a listener that is removed the first time it fires.
		"""

		self.add_listener(event_name, listener, once=True)
		return self

	def off (self, event_name: typing.Hashable, listener: ListenerType) -> "EventEmitter":

		"""
		Remove the first registration of a listener. Unknown listeners are ignored.
		"""

		self.remove_listener(event_name, listener)
		return self


	def after (self, event_name: typing.Hashable, target: ListenerType, listener: ListenerType) -> "EventEmitter":

		"""
		Insert a listener directly after ``target``, or at the end if ``target`` is not registered.
		"""

		self.add_listener(event_name, listener, after=target)
		return self

	def before (self, event_name: typing.Hashable, target: ListenerType, listener: ListenerType) -> "EventEmitter":

		"""
		Insert a listener directly before ``target``, or at the end if ``target`` is not registered.
		"""

		self.add_listener(event_name, listener, before=target)
		return self

	def after_once (self, event_name: typing.Hashable, target: ListenerType, listener: ListenerType) -> "EventEmitter":

		self.add_listener(event_name, listener, once=True, after=target)
		return self

	def before_once (self, event_name: typing.Hashable, target: ListenerType, listener: ListenerType) -> "EventEmitter":

		self.add_listener(event_name, listener, once=True, before=target)
		return self


	def prepend_listener (self, event_name: typing.Hashable, listener: ListenerType) -> "EventEmitter":

		"""
		Insert a listener at the front, ahead of everything already registered.
		"""

		self.add_listener(event_name, listener, prepend=True)
		return self

	def prepend_once_listener (self, event_name: typing.Hashable, listener: ListenerType) -> "EventEmitter":

		self.add_listener(event_name, listener, once=True, prepend=True)
		return self


def listener_count (emitter: sequent.registry.ListenerRegistry, event_name: typing.Hashable) -> int:

	"""
	Return the number of listeners ``emitter`` has for ``event_name``.
	"""

	return emitter.listener_count(event_name)
