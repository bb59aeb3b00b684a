#Fastapi
from fastapi import APIRouter, status
#Project files
import userdir.application.dependencies as deps
import userdir.presentation.schemas as schemas


########################################
#                Setup                 #
########################################

router = APIRouter(
    prefix="/users",
    tags = ["users"],
    responses={
        400: {"description": "Bad request or the store rejected the operation"},
        401: {"description": "Missing/invalid token or acting on another user"},
    }
    )

import logging
logger = logging.getLogger('userdir')


########################################
#             USER CRUD                #
########################################


@router.get('', response_model_exclude_none=True)
async def get_users(
        user_service: deps.UserServiceDependency,
        subject: deps.CurrentSubjectDependency,
    ) -> schemas.UsersResponse:
    '''Lists all users together with their message count'''
    return schemas.UsersResponse(users=await user_service.list())

@router.post("", responses= {
        201: {"description":"Created successfully"},
    },status_code=status.HTTP_201_CREATED, response_model_exclude_none=True,
)
async def create_user(
        user_service: deps.UserServiceDependency,
        new_user_data: schemas.UserCreationModel,
    ) -> schemas.UserResponse:
    '''Sign up. No token required'''
    return schemas.UserResponse(user=await user_service.register(new_user_data))


@router.patch("/{user_id}", description="Update your own user. Provide only those fields that need to be changed, send nickname: null to clear it.",
    response_model_exclude_none=True)
async def patch_user(
    user_service: deps.UserServiceDependency,
    subject: deps.CurrentSubjectDependency,
    edited_user: schemas.UserPatchModel,
    user_id: deps.OwnedUserIdDependency,
    ) -> schemas.UserResponse:
    return schemas.UserResponse(user=await user_service.patch(subject, user_id, edited_user))


@router.post("/{user_id}/messages", status_code=status.HTTP_201_CREATED)
async def post_message(
    user_service: deps.UserServiceDependency,
    subject: deps.CurrentSubjectDependency,
    message_data: schemas.UserMessageCreationModel,
    user_id: deps.OwnedUserIdDependency,
    ) -> schemas.UserMessageResponse:
    return schemas.UserMessageResponse(user_message=await user_service.post_message(subject, user_id, message_data))
