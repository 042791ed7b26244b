from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.core.config import settings
from storefront.core.logger import setup_logger
from storefront.core.session import ShopSession
from storefront.core.store_client import StoreClient, make_client_from_env
from storefront.routers.shop import router as shop_router


def create_app(store: Optional[StoreClient] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logger()
        session = ShopSession(store=store or make_client_from_env())
        app.state.session = session
        await session.start()
        yield
        await session.close()

    app = FastAPI(
        title="Storefront",
        description="Shopping cart kept in sync with a remote store",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(shop_router, tags=["shop"])
    return app


app = create_app()


def run() -> None:
    uvicorn.run("storefront.main:app", host=settings.host, port=settings.port, reload=settings.reload)


if __name__ == "__main__":
    run()
