"""Tests for the current user's thought and like listings."""


def test_my_thoughts(client, auth_headers, other_auth_headers, create_thought):
    """Test that only the caller's own thoughts are listed."""
    mine = create_thought(auth_headers, message="My own thought")
    create_thought(other_auth_headers, message="Somebody else's")
    create_thought(anonymous=True, message="Anonymous words")

    response = client.get("/users/me/thoughts", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert [t["_id"] for t in data["thoughts"]] == [mine["_id"]]
    assert data["pagination"]["totalCount"] == 1


def test_my_thoughts_filters_and_pages(client, auth_headers, create_thought):
    """Test category filtering and paging on the caller's thoughts."""
    for i in range(3):
        create_thought(auth_headers, message=f"Food thought {i}", category="Food")
    create_thought(auth_headers, message="Travel thought", category="Travel")

    data = client.get(
        "/users/me/thoughts?category=FOOD&limit=2&page=2", headers=auth_headers
    ).json()
    assert len(data["thoughts"]) == 1
    assert all(t["category"] == "Food" for t in data["thoughts"])
    assert data["pagination"]["currentPage"] == 2
    assert data["pagination"]["totalPages"] == 2


def test_my_thoughts_requires_auth(client):
    """Test that the listing needs a token."""
    assert client.get("/users/me/thoughts").status_code == 401


def test_my_likes(client, auth_headers, other_auth_headers, create_thought):
    """Test that liked thoughts are listed and unliked ones drop out."""
    first = create_thought(other_auth_headers, message="First liked")
    second = create_thought(other_auth_headers, message="Second liked")
    create_thought(other_auth_headers, message="Never liked")

    client.post(f"/thoughts/{first['_id']}/like", headers=auth_headers)
    client.post(f"/thoughts/{second['_id']}/like", headers=auth_headers)

    data = client.get("/users/me/likes", headers=auth_headers).json()
    assert [t["_id"] for t in data["likedThoughts"]] == [second["_id"], first["_id"]]
    assert data["pagination"]["totalCount"] == 2

    client.post(f"/thoughts/{second['_id']}/like", headers=auth_headers)
    data = client.get("/users/me/likes?sort=createdAt", headers=auth_headers).json()
    assert [t["_id"] for t in data["likedThoughts"]] == [first["_id"]]


def test_my_likes_requires_auth(client):
    """Test that the likes listing needs a token."""
    response = client.get("/users/me/likes")
    assert response.status_code == 401
    assert response.json()["details"] == "Access token is required"


def test_my_thoughts_rejects_bad_query(client, auth_headers):
    """Test that bad listing parameters get the same 400 as the public list."""
    response = client.get(
        "/users/me/thoughts?page=0&minHearts=-1&newerThan=someday", headers=auth_headers
    )
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Bad query parameters"
    assert len(data["details"]) == 3
