"""Use cases for blog posts and their moderation."""

from .add_comment import add_comment
from .change_blog_status import change_blog_status
from .create_blog import create_blog
from .delete_blog import delete_blog
from .get_blog import get_blog
from .list_blogs import list_blogs, list_my_blogs
from .update_blog import update_blog

__all__ = [
    "add_comment",
    "change_blog_status",
    "create_blog",
    "delete_blog",
    "get_blog",
    "list_blogs",
    "list_my_blogs",
    "update_blog",
]
