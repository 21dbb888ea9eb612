"""
Request-scoped accessors for the services the app factory builds.
"""
from fastapi import Request

from taskhub.core.security import TokenService
from taskhub.store.ports import TaskStore


def get_store(request: Request) -> TaskStore:
    return request.app.state.store


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens
