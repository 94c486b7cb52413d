import logging

from src.libs.result import Error, Result, Return
from src.app.repositories.user_repository import DuplicateIdentityError
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, User, UserRole
from .dtos import RegisterCommand, UserPrincipal

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[UserPrincipal]

    Business Logic:
    1. Reject a username that is already taken (DUPLICATE_IDENTITY)
    2. Reject an email that is already registered (DUPLICATE_IDENTITY)
    3. Hash password
    4. Create User with role=user, 2FA disabled, no reset in flight
    5. Create AuditEvent with action=register
    6. Commit transaction atomically
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(self, command: RegisterCommand) -> Result[UserPrincipal]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with validated username, email, password

        Returns:
            Result[UserPrincipal] for the new user
            or Error(DUPLICATE_IDENTITY) if username or email exists
        """
        async with self.uow:
            if await self.uow.users.get_by_username(command.username):
                logger.info(f"Registration rejected, username taken: {command.username}")
                return Return.err(
                    Error("DUPLICATE_IDENTITY", "Username already exists")
                )

            if await self.uow.users.get_by_email(command.email):
                logger.info("Registration rejected, email already registered")
                return Return.err(
                    Error("DUPLICATE_IDENTITY", "Email already registered")
                )

            user = User(
                username=command.username,
                email=command.email,
                password_hash=self.hasher.hash(command.password),
                role=UserRole.user,
                first_name=command.first_name,
                last_name=command.last_name,
            )
            try:
                user = await self.uow.users.create(user)
            except DuplicateIdentityError:
                # Lost a race with a concurrent registration
                await self.uow.rollback()
                logger.info(f"Registration rejected on insert, identity taken: {command.username}")
                return Return.err(
                    Error("DUPLICATE_IDENTITY", "Username or email already registered")
                )

            audit_event = AuditEvent(
                user_id=user.id,
                action="register",
                event_metadata={"username": user.username},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            logger.info(f"User registered: {user.id}")
            return Return.ok(UserPrincipal.from_user(user))
