from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union

import numpy as np

from qrcore.pipeline.config import PipelineConfig
from qrcore.protocol import bitstream as bitstream_stage
from qrcore.protocol.bitstream import ErrorCorrectionLevel
from qrcore.layout import matrix as matrix_stage
from qrcore.utils.bitops import bits_to_bytes


@dataclass(frozen=True)
class Pipeline:
    cfg: PipelineConfig = field(default_factory=PipelineConfig)

    def encode(self, text: Union[str, bytes]) -> str:
        return bitstream_stage.tx(text, cfg=self.cfg.bitstream)

    def build(self, text: Union[str, bytes]) -> np.ndarray:
        bits = self.encode(text)
        return matrix_stage.build(bits, cfg=self.cfg.matrix)


def make_matrix(text: Union[str, bytes], level: Union[ErrorCorrectionLevel, str] = "M") -> np.ndarray:
    cfg = PipelineConfig(bitstream=bitstream_stage.Config(level=ErrorCorrectionLevel.coerce(level)))
    return Pipeline(cfg).build(text)


@dataclass(frozen=True, eq=False)
class QRCode:
    """
    A finished symbol: the text, its level, the encoded bitstream and the grid.

    Renderers consume `matrix` (or `to_list()`); nothing here draws pixels.
    """
    text: Union[str, bytes]
    level: ErrorCorrectionLevel
    bitstream: str
    matrix: np.ndarray

    @classmethod
    def make(
        cls,
        text: Union[str, bytes],
        level: Union[ErrorCorrectionLevel, str] = ErrorCorrectionLevel.M,
        *,
        matrix_cfg: matrix_stage.Config = matrix_stage.Config(),
    ) -> "QRCode":
        lvl = ErrorCorrectionLevel.coerce(level)
        pipe = Pipeline(PipelineConfig(bitstream=bitstream_stage.Config(level=lvl), matrix=matrix_cfg))
        bits = pipe.encode(text)
        return cls(text=text, level=lvl, bitstream=bits, matrix=matrix_stage.build(bits, cfg=matrix_cfg))

    @property
    def size(self) -> int:
        return int(self.matrix.shape[0])

    def to_list(self) -> List[List[int]]:
        return self.matrix.tolist()

    def to_bytes(self) -> bytes:
        """The bitstream packed MSB-first, one byte per 8 bits."""
        return bits_to_bytes([int(b) for b in self.bitstream])
