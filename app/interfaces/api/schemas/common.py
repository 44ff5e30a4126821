"""Schemas shared by several endpoints."""

from pydantic import BaseModel

from app.domain.entities import Page


class PaginationRead(BaseModel):
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def from_page(cls, page: Page) -> "PaginationRead":
        return cls(total=page.total, page=page.page, limit=page.limit, pages=page.pages)


class MessageResponse(BaseModel):
    message: str
