"""Pet collection — /pets."""

from burrow import Router, generate_url

router = Router()
url = generate_url()

PETS = ["cat", "dog"]


@router.get(url)
def list_pets():
    return {"pets": PETS}
