import userdir.domain.repositories as repos
import userdir.presentation.schemas as schemas
import userdir.domain.models as domain
import userdir.domain.services as services
import userdir.domain.exceptions as domexc
import userdir.application.models as m

import logging

logger = logging.getLogger('userdir')

class UserService:

    def __init__(self, user_repo: repos.IUserRepository, password_hasher: services.IPasswordHasherAsync) -> None:
        self.user_repo = user_repo
        self.hasher = password_hasher

    def _ensure_owner(self, subject: m.Subject, target_user_id: int, action: str) -> None:
        '''Same-user-only policy: the role carried by the token grants nothing here'''
        if subject.id != target_user_id:
            logger.warning(f'[USERS: {action}] Subject id={subject.id} tried to act on user id={target_user_id} - denied')
            raise domexc.NotResourceOwner("Not Authorized")


    async def list(self) -> list[schemas.UserDTO]:
        users = await self.user_repo.list()
        return [schemas.UserDTO.model_validate(user, from_attributes=True) for user in users]

    async def register(self, user_data: schemas.UserCreationModel) -> schemas.UserDTO:
        'Used by anyone to sign up'
        user = await domain.User.create(
            username=user_data.username,
            email=user_data.email,
            user_type=user_data.user_type,
            nickname=user_data.nickname,
            password=user_data.password,
            hasher=self.hasher
        )
        saved_user = await self.user_repo.create(user)
        logger.info(f'[USERS: Register] Created user id={saved_user.id}')
        return schemas.UserDTO.model_validate(saved_user, from_attributes=True)

    async def patch(self, subject: m.Subject, target_user_id: int, edited_user: schemas.UserPatchModel) -> schemas.UserDTO:
        'Used by users to edit their own profile. Only the keys present in the request body are applied'
        self._ensure_owner(subject, target_user_id, 'Patch')

        patch = domain.UserPatch(
            username=edited_user.username,
            email=edited_user.email,
            user_type=edited_user.user_type,
            nickname=edited_user.nickname,
            nickname_provided='nickname' in edited_user.model_fields_set,
        )
        updated = await self.user_repo.patch(target_user_id, patch)
        logger.info(f'[USERS: Patch] Updated user id={target_user_id}, fields={sorted(patch.changes())}')
        return schemas.UserDTO.model_validate(updated, from_attributes=True)

    async def post_message(self, subject: m.Subject, target_user_id: int, message_data: schemas.UserMessageCreationModel) -> schemas.UserMessageDTO:
        self._ensure_owner(subject, target_user_id, 'Message')

        message = await self.user_repo.create_message(
            domain.UserMessage(user_id=target_user_id, message=message_data.message)
        )
        logger.info(f'[USERS: Message] Created message id={message.id} for user id={target_user_id}')
        return schemas.UserMessageDTO.model_validate(message, from_attributes=True)
