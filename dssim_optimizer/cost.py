import logging
import math
import os
import threading
import time

from .base import Encoder, QualityEvaluator
from .errors import ConversionError, MetricError
from .params import ToolPaths
from .utils import run_cmd

logger = logging.getLogger(__name__)


class DssimEvaluator(QualityEvaluator):
    """
    Scores a quality by recompressing the input and comparing it with dssim.

    Nothing touches disk: the candidate is piped encoder -> convert -> dssim
    stdin, and the PNG of the original, converted once and kept in memory,
    reaches dssim through a second pipe opened as /dev/fd/N.
    """

    def __init__(
        self,
        input_path: str,
        encoder: Encoder,
        tools: ToolPaths = ToolPaths(),
        timeout: float = 120.0,
        log_path: str = None,
    ):
        self.input_path = input_path
        self.encoder = encoder
        self.tools = tools
        self.timeout = timeout
        self.cache = {}
        self.reference_png = None
        self.log_file = open(log_path, "w", encoding="utf-8") if log_path else None

    def reset(self):
        self.cache = {}
        self.reference_png = None

    def close(self):
        self.reference_png = None
        if self.log_file is not None:
            self.log_file.close()
            self.log_file = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def evaluate(self, quality: int) -> float:
        if quality in self.cache:
            return self.cache[quality]

        reference_png = self._reference()
        candidate_jpeg = self.encoder.compress(self.input_path, quality)
        candidate_png = self._to_png("-", candidate_jpeg)
        out = self._dssim(reference_png, candidate_png)
        score = parse_dssim_output(out.decode(errors="replace"))

        self.cache[quality] = score
        self._log(f"Encoder: {self.encoder.name} Quality: {quality} -> DSSIM: {score}")
        return score

    def _log(self, msg):
        logger.debug(msg)
        if self.log_file is None:
            return
        self.log_file.write(f"[{time.strftime('%H:%M:%S')}] {msg}\n")
        self.log_file.flush()

    def _reference(self) -> bytes:
        if self.reference_png is None:
            self.reference_png = self._to_png(self.input_path)
        return self.reference_png

    def _dssim(self, reference_png: bytes, candidate_png: bytes) -> bytes:
        read_fd, write_fd = os.pipe()
        writer = threading.Thread(
            target=_feed_pipe, args=(write_fd, reference_png), daemon=True
        )
        writer.start()
        try:
            return run_cmd(
                [self.tools.dssim, f"/dev/fd/{read_fd}", "/dev/stdin"],
                MetricError,
                input_bytes=candidate_png,
                timeout=self.timeout,
                pass_fds=(read_fd,),
            )
        finally:
            os.close(read_fd)
            writer.join()

    def _to_png(self, source: str, data: bytes = None) -> bytes:
        png = run_cmd(
            [self.tools.convert, source, "png:-"],
            ConversionError,
            input_bytes=data,
            timeout=self.timeout,
        )
        if not png:
            raise ConversionError(f"convert produced no PNG for {source}")
        return png


def parse_dssim_output(output: str) -> float:
    """dssim prints '<score>\t<file>'; the first token is the score."""
    tokens = output.split()
    if not tokens:
        raise MetricError("dssim printed nothing")
    try:
        score = float(tokens[0])
    except ValueError:
        raise MetricError(f"Unparseable dssim output: {output.strip()!r}") from None
    if math.isnan(score) or score < 0:
        raise MetricError(f"dssim returned an invalid score: {tokens[0]}")
    return score


def _feed_pipe(fd: int, data: bytes):
    try:
        view = memoryview(data)
        while view:
            written = os.write(fd, view)
            view = view[written:]
    except BrokenPipeError:
        # reader went away early; dssim's exit status reports why
        pass
    finally:
        os.close(fd)
