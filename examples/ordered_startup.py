import asyncio
import logging

import sequent

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

emitter = sequent.EventEmitter.from_settings(sequent.load_settings())


async def open_database (service: str) -> None:
	logger.info(f"{service}: opening database")
	await asyncio.sleep(0.1)


async def warm_cache (service: str) -> None:
	logger.info(f"{service}: warming cache")
	await asyncio.sleep(0.05)


def announce (service: str) -> None:
	logger.info(f"{service}: ready")


def check_disk (service: str) -> None:
	raise RuntimeError(f"{service}: disk is read-only")


def report_error (exc: Exception) -> None:
	logger.warning(f"Listener failed: {exc}")


# Registration order is deliberately scrambled; the positioning calls put it right.
emitter.on("startup", announce)
emitter.before("startup", announce, warm_cache)
emitter.prepend_listener("startup", open_database)
emitter.after_once("startup", open_database, check_disk)
emitter.prepend_once_listener("startup", lambda service: logger.info(f"{service}: first boot"))

# Without this, check_disk would stop the startup sequence.
emitter.on(sequent.LISTENER_ERROR_EVENT, report_error)


async def main () -> None:

	"""Run the startup sequence twice to show once listeners expiring."""

	await emitter.emit("startup", "api")
	await emitter.emit("startup", "api")


if __name__ == "__main__":
	asyncio.run(main())
