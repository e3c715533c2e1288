# tests/v1/test_comments_api.py
"""Tests for comment endpoints."""

from fastapi import status


def _comment(client, headers, post_id, content="hello", is_anonymous=False, parent_comment_id=None):
    params = {"post_id": post_id}
    if parent_comment_id is not None:
        params["parent_comment_id"] = parent_comment_id
    return client.post(
        "/api/v1/comment",
        params=params,
        json={"content": content, "is_anonymous": is_anonymous},
        headers=headers,
    )


def test_anonymous_comment_hides_author(client, user_factory, post_factory, auth_headers) -> None:
    """Test that anonymous comments expose a number instead of the user id."""
    author, reader = user_factory(), user_factory()
    post = post_factory(author)

    reader_comment = _comment(client, auth_headers(reader), post.id, is_anonymous=True)
    author_comment = _comment(client, auth_headers(author), post.id, is_anonymous=True)

    assert reader_comment.status_code == status.HTTP_201_CREATED
    body = reader_comment.json()
    assert body["user_id"] is None
    assert body["anonymous_number"] == 1
    assert body["is_mine"] is True
    assert author_comment.json()["anonymous_number"] == 0


def test_reply_is_flattened(client, user_factory, post_factory, auth_headers) -> None:
    author = user_factory()
    headers = auth_headers(author)
    post = post_factory(author)
    top_id = _comment(client, headers, post.id).json()["id"]
    reply_id = _comment(client, headers, post.id, parent_comment_id=top_id).json()["id"]

    nested = _comment(client, headers, post.id, parent_comment_id=reply_id)

    assert nested.json()["parent_comment_id"] == top_id


def test_edit_and_delete(client, user_factory, post_factory, auth_headers) -> None:
    author, other = user_factory(), user_factory()
    post = post_factory(author)
    comment_id = _comment(client, auth_headers(author), post.id).json()["id"]

    forbidden = client.patch(
        f"/api/v1/comment/{comment_id}",
        json={"content": "not yours"},
        headers=auth_headers(other),
    )
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN

    edited = client.patch(
        f"/api/v1/comment/{comment_id}",
        json={"content": "edited"},
        headers=auth_headers(author),
    )
    assert edited.json()["content"] == "edited"

    deleted = client.delete(f"/api/v1/comment/{comment_id}", headers=auth_headers(author))
    assert deleted.status_code == status.HTTP_204_NO_CONTENT


def test_like_toggle_and_self_like(client, user_factory, post_factory, auth_headers) -> None:
    """Test liking someone else's comment and refusing a self-like."""
    author, fan = user_factory(), user_factory()
    post = post_factory(author)
    comment_id = _comment(client, auth_headers(author), post.id).json()["id"]

    liked = client.post(f"/api/v1/comment/like/{comment_id}", headers=auth_headers(fan))
    unliked = client.post(f"/api/v1/comment/like/{comment_id}", headers=auth_headers(fan))
    self_like = client.post(f"/api/v1/comment/like/{comment_id}", headers=auth_headers(author))

    assert liked.json() == {"is_liked": True}
    assert unliked.json() == {"is_liked": False}
    assert self_like.status_code == status.HTTP_403_FORBIDDEN
    assert self_like.json()["name"] == "SelfLikeForbiddenError"


def test_comment_on_missing_post(client, user_factory, auth_headers) -> None:
    response = _comment(client, auth_headers(user_factory()), 99999)
    assert response.status_code == status.HTTP_404_NOT_FOUND
