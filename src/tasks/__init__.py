"""Task modules live here.

Each module exposes `register(registry, stages, params)` and adds its tasks to
the registry; see `compile_sass.py`.

Do not implement logic here unless it's shared helpers; keep tasks modular per file.
"""
