"""Health check — plain handler functions; burrow builds the Router."""


async def get(request):
    return {"status": "ok"}
