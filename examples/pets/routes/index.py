"""Home page — folder-style index route, served at /."""

from burrow import Router, generate_url

router = Router()


@router.get(generate_url())
def index():
    return "Pets home"
