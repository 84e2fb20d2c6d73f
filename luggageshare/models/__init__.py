from luggageshare.models.user import User, VerificationToken  # noqa: F401
from luggageshare.models.post import PostStatus, TravellerPost, SenderPost  # noqa: F401
from luggageshare.models.request import Request, RequestStatus, TRANSITIONS  # noqa: F401
from luggageshare.models.conversation import (  # noqa: F401
    Conversation, Participant, Message, MessageType,
)
