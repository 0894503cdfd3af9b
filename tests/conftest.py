import pytest

import sequent.event_emitter


@pytest.fixture
def emitter () -> sequent.event_emitter.EventEmitter:

	"""A fresh emitter with the default threshold."""

	return sequent.event_emitter.EventEmitter()


@pytest.fixture
def call_log () -> list:

	"""Shared list that test listeners append to, in call order."""

	return []
