# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Run the gallery server with ``python -m gallery``."""

import uvicorn

from gallery.config import settings


def main() -> None:
    uvicorn.run("gallery.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
