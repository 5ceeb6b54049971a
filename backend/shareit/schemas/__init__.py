from shareit.schemas.user import UserCreate, UserUpdate, UserResponse
from shareit.schemas.item import ItemCreate, ItemUpdate, ItemResponse, ItemDetailResponse
from shareit.schemas.booking import BookingCreate, BookingUpdate, BookingResponse, BookingShort
from shareit.schemas.comment import CommentCreate, CommentResponse

__all__ = [
    "UserCreate", "UserUpdate", "UserResponse",
    "ItemCreate", "ItemUpdate", "ItemResponse", "ItemDetailResponse",
    "BookingCreate", "BookingUpdate", "BookingResponse", "BookingShort",
    "CommentCreate", "CommentResponse",
]
