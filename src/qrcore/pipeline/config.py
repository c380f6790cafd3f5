from __future__ import annotations

from dataclasses import dataclass, field

from qrcore.protocol.bitstream import Config as BitstreamConfig
from qrcore.layout.matrix import Config as MatrixConfig


@dataclass(frozen=True)
class PipelineConfig:
    """
    End-to-end symbol configuration.

    Stages run in this order:
      bitstream (mode | count | data | EC | pad) -> matrix (finder -> timing -> data)
    """
    bitstream: BitstreamConfig = field(default_factory=BitstreamConfig)
    matrix: MatrixConfig = field(default_factory=MatrixConfig)
