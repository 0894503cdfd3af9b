import asyncio

import pytest

import sequent.bound_listener
import sequent.constants
import sequent.event_emitter


@pytest.mark.asyncio
async def test_invoke_reports_success (emitter: sequent.event_emitter.EventEmitter) -> None:

	"""A listener that returns normally gives a clean outcome."""

	entry = sequent.bound_listener.wrap_listener(emitter, "event", lambda: None)

	outcome = await entry.invoke()

	assert outcome.error is None
	assert not outcome.failed
	assert entry.fired


@pytest.mark.asyncio
async def test_invoke_returns_errors_instead_of_raising (emitter: sequent.event_emitter.EventEmitter) -> None:

	"""Without an error channel the failure is returned, unredirected."""

	error = RuntimeError("boom")

	def fail () -> None:
		raise error

	entry = sequent.bound_listener.wrap_listener(emitter, "event", fail)

	outcome = await entry.invoke()

	assert outcome.error is error
	assert outcome.failed
	assert not outcome.redirected

	with pytest.raises(RuntimeError):
		outcome.raise_for_error()


@pytest.mark.asyncio
async def test_invoke_redirects_to_error_channel (emitter: sequent.event_emitter.EventEmitter) -> None:

	"""With an error channel the failure is emitted there and marked as handled."""

	received: list[Exception] = []
	error = RuntimeError("boom")

	async def fail () -> None:
		raise error

	emitter.on(sequent.constants.LISTENER_ERROR_EVENT, received.append)
	entry = sequent.bound_listener.wrap_listener(emitter, "event", fail)

	outcome = await entry.invoke()

	assert received == [error]
	assert outcome.redirected
	assert not outcome.failed
	outcome.raise_for_error()


@pytest.mark.asyncio
async def test_error_channel_entries_never_redirect (emitter: sequent.event_emitter.EventEmitter) -> None:

	"""An error-channel listener's failure is returned even when the channel has listeners."""

	received: list[Exception] = []

	def fail (exc: Exception) -> None:
		raise exc

	emitter.on(sequent.constants.LISTENER_ERROR_EVENT, received.append)
	entry = sequent.bound_listener.wrap_listener(emitter, sequent.constants.LISTENER_ERROR_EVENT, fail)

	assert entry.is_error_channel

	outcome = await entry.invoke(ValueError("bad"))

	assert outcome.failed
	assert isinstance(outcome.error, ValueError)
	assert received == []


@pytest.mark.asyncio
async def test_once_entry_skips_after_firing (emitter: sequent.event_emitter.EventEmitter) -> None:

	"""A once entry runs a single time and then reports itself as skipped."""

	calls: list[int] = []
	entry = sequent.bound_listener.wrap_listener(emitter, "event", lambda: calls.append(1), once=True)

	first = await entry.invoke()
	second = await entry.invoke()

	assert calls == [1]
	assert not first.skipped
	assert second.skipped


@pytest.mark.asyncio
async def test_raw_once_listener_can_be_called_by_hand (emitter: sequent.event_emitter.EventEmitter) -> None:

	"""Calling a once entry from raw_listeners() fires it once and unregisters it."""

	calls: list[str] = []

	emitter.once("event", lambda value: calls.append(value))

	(entry,) = emitter.raw_listeners("event")

	await entry("manual")
	await entry("again")
	await emitter.emit("event", "emitted")

	assert calls == ["manual"]
	assert emitter.listener_count("event") == 0


@pytest.mark.asyncio
async def test_calling_an_entry_raises_unhandled_errors (emitter: sequent.event_emitter.EventEmitter) -> None:

	"""Awaiting an entry directly raises the listener's error like emit() would."""

	def fail () -> None:
		raise KeyError("x")

	entry = sequent.bound_listener.wrap_listener(emitter, "event", fail, once=True)

	with pytest.raises(KeyError):
		await entry()


@pytest.mark.asyncio
async def test_pass_emitter_prepends_owner (emitter: sequent.event_emitter.EventEmitter) -> None:

	"""pass_emitter puts the owning emitter ahead of the call arguments."""

	seen: list[tuple] = []
	entry = sequent.bound_listener.wrap_listener(emitter, "event", lambda *args: seen.append(args), pass_emitter=True)

	await entry.invoke("a", "b")

	assert seen == [(emitter, "a", "b")]


def test_matches_compares_raw_listener (emitter: sequent.event_emitter.EventEmitter) -> None:

	"""Entries are matched by the listener they wrap, not by the wrapper."""

	def listener () -> None:
		pass

	entry = sequent.bound_listener.wrap_listener(emitter, "event", listener)

	assert entry.matches(listener)
	assert not entry.matches(lambda: None)
	assert not entry.matches(entry)
	assert "event" in repr(entry)


@pytest.mark.asyncio
async def test_cancellation_is_never_redirected (emitter: sequent.event_emitter.EventEmitter) -> None:

	"""CancelledError passes straight out of emit() and skips the error channel."""

	received: list[BaseException] = []
	after: list[str] = []

	async def cancelled () -> None:
		raise asyncio.CancelledError()

	emitter.on(sequent.constants.LISTENER_ERROR_EVENT, received.append)
	emitter.on("event", cancelled)
	emitter.on("event", lambda: after.append("after"))

	with pytest.raises(asyncio.CancelledError):
		await emitter.emit("event")

	assert received == []
	assert after == []


@pytest.mark.asyncio
async def test_base_exceptions_escape_invoke (emitter: sequent.event_emitter.EventEmitter) -> None:

	"""Non-Exception errors are raised from invoke() rather than returned in an outcome."""

	received: list[BaseException] = []

	def interrupt () -> None:
		raise KeyboardInterrupt()

	emitter.on(sequent.constants.LISTENER_ERROR_EVENT, received.append)
	entry = sequent.bound_listener.wrap_listener(emitter, "event", interrupt)

	with pytest.raises(KeyboardInterrupt):
		await entry.invoke()

	assert received == []
