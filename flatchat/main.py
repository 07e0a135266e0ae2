import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from flatchat.config import get_settings
from flatchat.database.connection import close_store, connect_store, store_dependency
from flatchat.routers.auth import router as auth_router
from flatchat.routers.chats import router as chats_router
from flatchat.routers.contacts import router as contacts_router
from flatchat.routers.messages import router as messages_router
from flatchat.routers.users import router as users_router


settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="[%(asctime)s] %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("flatchat")


@asynccontextmanager
async def lifespan(app: FastAPI):

    await connect_store()
    try:
        yield
    finally:
        await close_store()


app = FastAPI(title="flatchat", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_origin],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected malformed body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Malformed request body."})


app.include_router(auth_router)
app.include_router(users_router)
app.include_router(chats_router)
app.include_router(contacts_router)
app.include_router(messages_router)


@app.get("/")
async def root(store = Depends(store_dependency)):

    return {"message": "flatchat backend running", "backend": store.backend}
