"""Pets — a chirp app whose routes live in the routes/ directory.

    routes/index.py          ->  GET  /
    routes/health.py         ->  GET  /health        (handler functions, no Router)
    routes/pets.py           ->  GET  /pets
    routes/pets/[pet].py     ->  GET  /pets/{pet}
    routes/_*.py             ->  ignored (helpers)

Run:
    python app.py
"""

import logging
from pathlib import Path

from chirp import App

import burrow

logging.basicConfig(level=logging.DEBUG)

app = App()
burrow.register_routes(
    app,
    [Path(__file__).parent / "routes"],
    before_register=lambda path: print(f"  loading {path}"),
)


if __name__ == "__main__":
    app.run()
