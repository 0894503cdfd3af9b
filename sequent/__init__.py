"""
Sequent - an ordered, asynchronous event emitter for Python.

Listeners are awaited one at a time, in a well defined order, so each one
can depend on the work of the listeners ahead of it. Sync and async
callables can be mixed freely.

- **Ordering.** ``on()`` appends, ``prepend_listener()`` goes first,
  ``before()`` and ``after()`` place a listener next to one already
  registered, and ``add_listener(at=...)`` takes an explicit index.
- **Once listeners.** ``once()``, ``prepend_once_listener()``,
  ``before_once()`` and ``after_once()`` register listeners that remove
  themselves when they fire.
- **Error channel.** A listener error is emitted on ``"listener-error"``
  when that event has listeners; otherwise it propagates out of
  ``emit()`` and stops the remaining listeners.

Package-level exports: ``EventEmitter``, ``BoundListener``,
``ListenerOutcome``, ``EmitterSettings``, ``load_settings``, ``listener_count``,
``InvalidListenerType``, ``OutOfRange``.

Example:
	```python
	import asyncio
	import sequent

	emitter = sequent.EventEmitter()

	emitter.on("ready", lambda name: print("hello", name))
	emitter.on("listener-error", lambda exc: print("failed:", exc))

	asyncio.run(emitter.emit("ready", "world"))
	```
"""

import sequent.bound_listener
import sequent.config
import sequent.constants
import sequent.errors
import sequent.event_emitter
import sequent.registry


EventEmitter = sequent.event_emitter.EventEmitter
BoundListener = sequent.bound_listener.BoundListener
ListenerOutcome = sequent.bound_listener.ListenerOutcome
EmitterSettings = sequent.config.EmitterSettings
InvalidListenerType = sequent.errors.InvalidListenerType
OutOfRange = sequent.errors.OutOfRange
listener_count = sequent.event_emitter.listener_count
load_settings = sequent.config.load_settings
DEFAULT_MAX_LISTENERS = sequent.constants.DEFAULT_MAX_LISTENERS
LISTENER_ERROR_EVENT = sequent.constants.LISTENER_ERROR_EVENT
