import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from tracking_logger import __version__
from tracking_logger.acquisition import create_simulated_collaborators
from tracking_logger.configs import AppSettings
from tracking_logger.core import SessionRecorder, SessionRunner


def main():
    # 1. Command line: only the participant identity
    parser = argparse.ArgumentParser(description="Fixed-rate session tracking logger")
    parser.add_argument(
        "--participant",
        default=None,
        help="Participant id. When omitted the identity policy from the settings applies."
    )
    args = parser.parse_args()

    # 2. Load Configuration
    try:
        settings = AppSettings()
    except ValidationError as e:
        print(f"Configuration Error: {e}")
        sys.exit(1)

    # 3. Setup Logging
    logging.basicConfig(
        level=settings.logging.level.upper(),
        format=settings.logging.format,
        stream=sys.stdout
    )
    logger = logging.getLogger("main")
    logger.info(f"Starting Tracking Logger v{__version__}")

    # 4. Dependency Injection (simulated host)
    simulation = settings.simulation
    logger.warning("Initializing SIMULATED environment")
    collaborators = create_simulated_collaborators(
        initial_scene=simulation.initial_scene,
        duration_s=simulation.duration_s,
        pause_scene=settings.scenes.pause_scene,
    )
    recorder = SessionRecorder(collaborators, settings)
    runner = SessionRunner(recorder, host_rate_hz=simulation.host_rate_hz, participant_id=args.participant)

    # 5. Record until the duration elapses or the user interrupts
    saved = False
    try:
        saved = asyncio.run(runner.run_for(simulation.duration_s))
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        # Returns the earlier result if run_for() already finalized while unwinding
        saved = recorder.finalize()
    except Exception:
        logger.exception("Fatal Application Error")
    finally:
        logger.info("Shutdown sequence completed.")

    sys.exit(0 if saved else 1)

if __name__ == "__main__":
    main()
