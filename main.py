"""Arranque de Mercy desde un checkout (sin `pip install -e .`).

Uso:
- `python -m main decode base64 TWVyY3k=`

El código vive en `src/`; aquí solo se antepone esa carpeta a `sys.path` y se
delega en `cli.main.run`, igual que el script `mercy` instalado.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


def _prefer_utf8_streams() -> None:
    # Las consolas cp1252 de Windows fallan con el hexdump y los paneles de rich.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")


def main() -> None:
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))
    _prefer_utf8_streams()

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
