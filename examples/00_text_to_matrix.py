import logging
import sys

from qrcore.layout.matrix import capacity
from qrcore.pipeline.pipeline import QRCode


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    text = sys.argv[1] if len(sys.argv) > 1 else "Hello"
    level = sys.argv[2] if len(sys.argv) > 2 else "M"

    qr = QRCode.make(text, level)
    print(f"{len(qr.bitstream)} bits, {capacity()} data cells")
    for row in qr.to_list():
        print("".join("##" if v else "  " for v in row))
