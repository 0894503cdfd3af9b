import typing

import sequent.constants


class InvalidListenerType (TypeError):

	"""
	Raised when a registration call is given a listener that is not callable.
	"""

	code = sequent.constants.ERR_INVALID_ARG_TYPE

	def __init__ (self, listener: typing.Any) -> None:

		self.listener = listener

		super().__init__(f'The "listener" argument must be callable. Received type {type(listener).__name__}')


class OutOfRange (ValueError):

	"""
	Raised when the max-listeners threshold is negative, NaN, infinite or not a number.
	"""

	code = sequent.constants.ERR_OUT_OF_RANGE

	def __init__ (self, name: str, value: typing.Any) -> None:

		self.value = value

		super().__init__(f'The value of "{name}" is out of range. It must be a non-negative number. Received {value!r}')
