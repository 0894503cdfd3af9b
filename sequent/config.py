import dataclasses
import logging
import os
import typing

import yaml

import sequent.constants


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class EmitterSettings:

	"""
	Settings applied to emitters built with ``EventEmitter.from_settings()``.
	"""

	max_listeners: int = sequent.constants.DEFAULT_MAX_LISTENERS


def load_settings (config_path: str = "sequent.yaml") -> EmitterSettings:

	"""
	Load emitter settings from the ``events`` section of a YAML file.

	A missing file, or a file without an ``events`` section, gives the
	defaults. A file whose top level or ``events`` section is not a mapping
	raises ``ValueError``. Values are validated when the emitter is built.

	Example ``sequent.yaml``:
		```yaml
		events:
		  max_listeners: 25
		```
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return EmitterSettings()

	with open(config_path, "r") as f:
		config: typing.Any = yaml.safe_load(f) or {}

	if not isinstance(config, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping, not {type(config).__name__}")

	events = config.get("events") or {}

	if not isinstance(events, dict):
		raise ValueError(f"The 'events' section of {config_path} must be a mapping, not {type(events).__name__}")

	return EmitterSettings(
		max_listeners=events.get("max_listeners", sequent.constants.DEFAULT_MAX_LISTENERS)
	)
