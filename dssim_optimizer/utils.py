import logging
import subprocess

logger = logging.getLogger(__name__)


def run_cmd(cmd, error_cls, input_bytes=None, timeout=120.0, pass_fds=()):
    """
    Run an external tool and return its stdout bytes.
    Every way the tool can fail is re-raised as error_cls.
    """
    logger.debug("Executing: %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            input=input_bytes,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout,
            pass_fds=pass_fds,
        )
    except FileNotFoundError as e:
        raise error_cls(f"{cmd[0]} not found: {e}") from e
    except subprocess.TimeoutExpired as e:
        raise error_cls(f"{cmd[0]} timed out after {timeout}s") from e

    if result.returncode != 0:
        stderr = result.stderr.decode(errors="replace").strip()
        raise error_cls(
            f"{cmd[0]} exited with code {result.returncode}: {stderr}"
        )
    return result.stdout


def setup_logging(verbose: bool, log_file: str = None):
    """Progress goes to stderr at INFO; -v adds the DEBUG lines (tool commands, scores)."""
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(message)s",
        handlers=handlers,
        force=True,
    )
