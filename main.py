"""Lanza bootkit desde un checkout sin instalar.

Útil en una máquina recién formateada, donde aún no hay entorno virtual:

    python main.py bootstrap --skip-optional

Añade `src/` a `sys.path` (los paquetes `cli`, `core` y `adapters` son
namespace packages) y delega en `cli.main.run`.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
