# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import cached_property

from sqlalchemy.orm import Session

from chatapp.application.services.authorization import AuthorizationGate
from chatapp.application.services.password_hashing import WerkzeugPasswordHasher
from chatapp.application.use_cases.chats.create_chat import CreateChatUseCase
from chatapp.application.use_cases.chats.manage_chat import (
    AddMembersUseCase,
    DeleteChatUseCase,
    GetChatUseCase,
    ListChatsUseCase,
    RemoveMemberUseCase,
    RenameChatUseCase,
)
from chatapp.application.use_cases.messages.messages import (
    DeleteMessageUseCase,
    EditMessageUseCase,
    GetMessageUseCase,
    ListMessagesUseCase,
    SendMessageUseCase,
)
from chatapp.application.use_cases.users.login_user import LoginUserUseCase
from chatapp.application.use_cases.users.profiles import (
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    TouchLastSeenUseCase,
    UpdateUserUseCase,
)
from chatapp.application.use_cases.users.register_user import RegisterUserUseCase
from chatapp.infrastructure.auth.tokens import FernetTokenService
from chatapp.infrastructure.repositories.sqlalchemy import (
    SqlAlchemyChatRepository,
    SqlAlchemyMembershipRepository,
    SqlAlchemyMessageRepository,
)
from chatapp.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from chatapp.interfaces.http.controllers.auth_controller import AuthController
from chatapp.interfaces.http.controllers.chats_controller import ChatsController
from chatapp.interfaces.http.controllers.messages_controller import MessagesController
from chatapp.interfaces.http.controllers.users_controller import UsersController
from chatapp.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig, session_factory: Callable[[], Session]) -> None:
        self._config = config
        self._session_factory = session_factory

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_service(self) -> FernetTokenService:
        return FernetTokenService.from_config(self._config.tokens)

    # Repositories

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self._session_factory)

    @cached_property
    def chat_repository(self) -> SqlAlchemyChatRepository:
        return SqlAlchemyChatRepository(self._session_factory)

    @cached_property
    def membership_repository(self) -> SqlAlchemyMembershipRepository:
        return SqlAlchemyMembershipRepository(self._session_factory)

    @cached_property
    def message_repository(self) -> SqlAlchemyMessageRepository:
        return SqlAlchemyMessageRepository(self._session_factory)

    @cached_property
    def authorization_gate(self) -> AuthorizationGate:
        return AuthorizationGate(
            chats=self.chat_repository,
            memberships=self.membership_repository,
            messages=self.message_repository,
        )

    # User use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        users = self.user_repository
        return UsersController(
            get_user=GetUserUseCase(users=users),
            list_users=ListUsersUseCase(users=users),
            update_user=UpdateUserUseCase(users=users, password_hasher=self.password_hasher),
            delete_user=DeleteUserUseCase(users=users),
            touch_last_seen=TouchLastSeenUseCase(users=users),
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            token_ttl_seconds=int(self.token_service.lifetime.total_seconds()),
        )

    # Chats and messages

    @cached_property
    def create_chat_use_case(self) -> CreateChatUseCase:
        return CreateChatUseCase(
            chats=self.chat_repository,
            memberships=self.membership_repository,
            users=self.user_repository,
        )

    @cached_property
    def chats_controller(self) -> ChatsController:
        chats, gate = self.chat_repository, self.authorization_gate
        return ChatsController(
            create_chat=self.create_chat_use_case,
            get_chat=GetChatUseCase(chats=chats, gate=gate),
            list_chats=ListChatsUseCase(chats=chats),
            rename_chat=RenameChatUseCase(chats=chats, gate=gate),
            delete_chat=DeleteChatUseCase(chats=chats, gate=gate),
            add_members=AddMembersUseCase(
                memberships=self.membership_repository,
                users=self.user_repository,
                gate=gate,
            ),
            remove_member=RemoveMemberUseCase(memberships=self.membership_repository, gate=gate),
        )

    @cached_property
    def messages_controller(self) -> MessagesController:
        messages, gate = self.message_repository, self.authorization_gate
        return MessagesController(
            send_message=SendMessageUseCase(messages=messages, gate=gate),
            get_message=GetMessageUseCase(messages=messages, gate=gate),
            list_messages=ListMessagesUseCase(messages=messages, gate=gate),
            edit_message=EditMessageUseCase(messages=messages, gate=gate),
            delete_message=DeleteMessageUseCase(messages=messages, gate=gate),
        )
