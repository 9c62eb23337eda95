from typing import Dict, List, Type

from .base import Encoder
from .errors import ConfigurationError, EncoderError
from .utils import run_cmd


class StdoutEncoder(Encoder):
    """Encoder whose command writes the compressed JPEG to stdout."""

    def compress(self, input_path: str, quality: int) -> bytes:
        data = run_cmd(
            self.command(input_path, quality), EncoderError, timeout=self.timeout
        )
        if not data:
            raise EncoderError(
                f"{self.name} produced no output at quality {quality}"
            )
        return data


class JpegoptimEncoder(StdoutEncoder):
    name = "jpegoptim"
    default_executable = "jpegoptim"

    def command(self, input_path: str, quality: int) -> List[str]:
        return [
            self.executable,
            "-q",
            "-p",
            "-f",
            f"--max={quality}",
            "--strip-all",
            "--all-progressive",
            "--stdout",
            input_path,
        ]


class MozjpegEncoder(StdoutEncoder):
    name = "mozjpeg"
    default_executable = "mozjpeg"

    def command(self, input_path: str, quality: int) -> List[str]:
        return [
            self.executable,
            "-quality",
            str(quality),
            "-dct",
            "float",
            input_path,
        ]


ENCODERS: Dict[str, Type[Encoder]] = {
    cls.name: cls for cls in (JpegoptimEncoder, MozjpegEncoder)
}


def get_encoder(name: str, executable: str = None, timeout: float = 120.0) -> Encoder:
    """Resolve an encoder by name. Done once, before the search starts."""
    try:
        cls = ENCODERS[name]
    except KeyError:
        supported = " | ".join(ENCODERS)
        raise ConfigurationError(
            f"Unsupported JPEG compression method '{name}'. Supported: {supported}"
        ) from None
    return cls(executable=executable, timeout=timeout)
