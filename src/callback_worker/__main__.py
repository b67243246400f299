"""Entrypoint: python -m callback_worker"""
from __future__ import annotations

from callback_worker.workers.callback_worker import main

if __name__ == "__main__":
    main()
