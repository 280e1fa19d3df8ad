from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from blog_backend.domain.posts.entities import Author, Post, PostSummary


class PostWriteRequestDTO(BaseModel):
    """Body of create and update; content is stored exactly as sent."""

    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)


class AuthorDTO(BaseModel):
    id: int
    username: str

    @classmethod
    def from_author(cls, author: Author) -> AuthorDTO:
        return cls(id=author.id, username=author.username)


class PostSummaryDTO(BaseModel):
    id: int
    title: str
    author: AuthorDTO
    created_at: datetime

    @classmethod
    def from_summary(cls, summary: PostSummary) -> PostSummaryDTO:
        return cls(
            id=summary.id,
            title=summary.title,
            author=AuthorDTO.from_author(summary.author),
            created_at=summary.created_at,
        )


class PostDetailDTO(PostSummaryDTO):
    content: str
    updated_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> PostDetailDTO:
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            author=AuthorDTO.from_author(post.author),
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class PostListResponseDTO(BaseModel):
    posts: list[PostSummaryDTO]


class PostDetailResponseDTO(BaseModel):
    post: PostDetailDTO


class PostCreatedResponseDTO(BaseModel):
    message: str = "Post created"
    post_id: int = Field(serialization_alias="postId")
