from contextlib import asynccontextmanager

from fastapi import FastAPI

from redis_cookie_store.redis_client import close_client
from redis_cookie_store.routers.cookies import router as cookies_router
from redis_cookie_store.services.stores import open_cookie_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.cookie_store = await open_cookie_store()
    yield
    app.state.cookie_store = None
    await close_client()


app = FastAPI(title="Redis Cookie Store", version="0.1.0", lifespan=lifespan)

app.include_router(cookies_router, prefix="/api")
