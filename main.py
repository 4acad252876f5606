import logfire

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from contextlib import asynccontextmanager

from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie

from models.users import User

from routers import auth, users

from security.settings import get_settings


settings = get_settings()

# Configure logfire BEFORE creating FastAPI app
logfire.configure(token=settings.logfire_token, send_to_logfire="if-token-present")

@asynccontextmanager
async def lifespan(app: FastAPI):
    logfire.info("Starting accounts application...")

    client = AsyncIOMotorClient(settings.database_url)  # * Connect to MongoDB

    # * Creates the unique indexes on email and username
    await init_beanie(
        database=client[settings.database_name],
        document_models=[User],
    )
    logfire.info("Database initialized successfully")

    yield

    logfire.info("Shutting down accounts application...")
    client.close()
    logfire.info("Application shutdown complete")


app = FastAPI(
    title="Accounts API",
    description="Account registration and login issuing short-lived access and refresh tokens.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.client_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["127.0.0.1"])

app.include_router(auth.router)
app.include_router(users.router)
