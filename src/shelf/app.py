# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shelf.auth.tokens import TokenService
from shelf.bootstrap import ensure_root_admin
from shelf.config import Settings
from shelf.core.models import Identity
from shelf.errors import ShelfError
from shelf.infra.book_repo import YamlBookStore
from shelf.infra.user_repo import YamlUserDirectory
from shelf.observability import setup_logging
from shelf.permissions import identity_from_header
from shelf.schemas import BookIn, BookUpdateIn, CredentialsIn
from shelf.services import book_service, user_service

logger = logging.getLogger(__name__)


def _envelope(message: str, data: Any = None, *, status_code: int = 200) -> JSONResponse:
    body = {"message": message, "success": True}
    if data is not None:
        body["data"] = data
    return JSONResponse(body, status_code=status_code)


def _directory(request: Request) -> YamlUserDirectory:
    return request.app.state.directory


def _books(request: Request) -> YamlBookStore:
    return request.app.state.books


def _tokens(request: Request) -> TokenService:
    return request.app.state.tokens


def require_identity(request: Request, authorization: str = Header(default="")) -> Identity:
    """Validate the bearer token once per request."""
    return identity_from_header(authorization, _tokens(request), _directory(request))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        s = settings or Settings.from_env()
        setup_logging(s.log_level, s.log_format)
        app.state.settings = s
        app.state.directory = YamlUserDirectory(s.users_path)
        app.state.books = YamlBookStore(s.books_path)
        app.state.tokens = TokenService(s.secret_key, lifetime_seconds=s.token_ttl_seconds, salt=s.token_salt)
        ensure_root_admin(
            app.state.directory,
            username=s.root_admin_username,
            password=s.root_admin_password,
        )
        logger.info("shelf ready")
        yield

    app = FastAPI(title="shelf", lifespan=lifespan)

    @app.exception_handler(ShelfError)
    async def _shelf_error(request: Request, exc: ShelfError):
        return JSONResponse(exc.to_response(), status_code=exc.http_status)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {"field": ".".join(str(p) for p in e.get("loc", ())[1:]), "message": e.get("msg", "")}
            for e in exc.errors()
        ]
        return JSONResponse(
            {"message": "Validation failed", "success": False, "code": "BAD_REQUEST", "errors": errors},
            status_code=400,
        )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # --- users ---

    @app.post("/users/signup")
    def signup(body: CredentialsIn, request: Request):
        user = user_service.sign_up(directory=_directory(request), username=body.username, password=body.password)
        return _envelope("Registration successful", user.public(), status_code=201)

    @app.post("/users/signin")
    def signin(body: CredentialsIn, request: Request):
        token = user_service.sign_in(
            directory=_directory(request),
            tokens=_tokens(request),
            username=body.username,
            password=body.password,
        )
        return _envelope("Sign-in successful", {"accessToken": token})

    @app.get("/users/profile")
    def get_profile(identity: Identity = Depends(require_identity)):
        return _envelope("Profile retrieved successfully", user_service.profile(identity))

    # --- books ---

    @app.get("/books")
    def list_books(request: Request):
        books = book_service.list_books(_books(request))
        return _envelope("Books retrieved successfully", [b.public() for b in books])

    @app.get("/books/{book_id}")
    def get_book(book_id: int, request: Request):
        book = book_service.get_book(_books(request), book_id)
        return _envelope("Book retrieved successfully", book.public())

    @app.post("/books")
    def create_book(body: BookIn, request: Request, identity: Identity = Depends(require_identity)):
        book = book_service.create_book(
            store=_books(request),
            directory=_directory(request),
            identity=identity,
            title=body.title,
            text=body.text,
        )
        return _envelope("Book created successfully", book.public(), status_code=201)

    @app.put("/books/{book_id}")
    def update_book(book_id: int, body: BookUpdateIn, request: Request, identity: Identity = Depends(require_identity)):
        book = book_service.update_book(
            store=_books(request),
            identity=identity,
            book_id=book_id,
            title=body.title,
            text=body.text,
        )
        return _envelope("Book updated successfully", book.public())

    @app.delete("/books/{book_id}")
    def delete_book(book_id: int, request: Request, identity: Identity = Depends(require_identity)):
        book_service.delete_book(store=_books(request), identity=identity, book_id=book_id)
        return _envelope("Book deleted successfully")

    return app


app = create_app()
