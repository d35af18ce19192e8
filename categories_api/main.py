from contextlib import asynccontextmanager

from fastapi import FastAPI

from categories_api import config, db
from categories_api.logging_config import setup_logging
from categories_api.routers import messages


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging(config.settings)
    config.get_category_config()
    await db.init_db()
    yield


app = FastAPI(lifespan=lifespan)
app.include_router(messages.router)


@app.get("/")
def read_root() -> dict[str, str]:
    return {"status": "ok"}
