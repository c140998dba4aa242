"""Dependency injection factories for the API.

The database lives on ``app.state`` for the lifetime of the application;
services are cheap and built per request around a UoW factory bound to it.
"""

from functools import lru_cache
from typing import Callable

from fastapi import Depends, Request

from core.config import settings
from domain.services.auth_service import AuthService
from domain.services.board_service import BoardService
from domain.services.board_team_service import BoardTeamService
from domain.services.invitation_service import InvitationService
from domain.services.task_service import TaskService
from domain.services.user_service import UserService
from domain.services.workspace_service import WorkspaceService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.password import BcryptPasswordHasher
from infrastructure.database.session import Database
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.email.sender import IEmailSender, SMTPEmailSender
from infrastructure.storage.object_store import IObjectStore, LocalObjectStore

UoWFactory = Callable[[], SQLAlchemyUnitOfWork]


def get_database(request: Request) -> Database:
    """The application's database, created in the lifespan handler."""
    return request.app.state.database  # type: ignore[no-any-return]


def get_uow_factory(database: Database = Depends(get_database)) -> UoWFactory:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(database.session_factory)

    return factory


@lru_cache
def get_auth_provider() -> JWTAuthProvider:
    """Get the token issuer/validator."""
    return JWTAuthProvider()


@lru_cache
def get_password_hasher() -> BcryptPasswordHasher:
    """Get the password hasher."""
    return BcryptPasswordHasher()


@lru_cache
def get_email_sender() -> IEmailSender:
    """Get the outgoing email sender."""
    return SMTPEmailSender(settings)


@lru_cache
def get_object_store() -> IObjectStore:
    """Get the attachment store."""
    return LocalObjectStore(settings.upload_dir, url_prefix=settings.upload_url_prefix)


def get_auth_service(
    uow_factory: UoWFactory = Depends(get_uow_factory),
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
    password_hasher: BcryptPasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    """Get Auth service instance."""
    return AuthService(
        uow_factory,
        auth_provider,
        password_hasher,
        allow_admin_self_registration=settings.allow_admin_self_registration,
    )


def get_user_service(uow_factory: UoWFactory = Depends(get_uow_factory)) -> UserService:
    """Get User service instance."""
    return UserService(uow_factory)


def get_workspace_service(
    uow_factory: UoWFactory = Depends(get_uow_factory),
) -> WorkspaceService:
    """Get Workspace service instance."""
    return WorkspaceService(uow_factory)


def get_board_service(
    uow_factory: UoWFactory = Depends(get_uow_factory),
    email_sender: IEmailSender = Depends(get_email_sender),
) -> BoardService:
    """Get Board service instance."""
    return BoardService(uow_factory, email_sender, settings.frontend_url)


def get_task_service(
    uow_factory: UoWFactory = Depends(get_uow_factory),
    object_store: IObjectStore = Depends(get_object_store),
) -> TaskService:
    """Get Task service instance."""
    return TaskService(uow_factory, object_store)


def get_invitation_service(
    uow_factory: UoWFactory = Depends(get_uow_factory),
    email_sender: IEmailSender = Depends(get_email_sender),
) -> InvitationService:
    """Get Invitation service instance."""
    return InvitationService(
        uow_factory,
        email_sender,
        settings.frontend_url,
        expiry_days=settings.invitation_expiry_days,
    )


def get_board_team_service(
    uow_factory: UoWFactory = Depends(get_uow_factory),
) -> BoardTeamService:
    """Get Board team service instance."""
    return BoardTeamService(uow_factory)
