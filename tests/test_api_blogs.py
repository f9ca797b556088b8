"""
Notes Backend — Blogs & Authors API Tests
==========================================

What:  End-to-end tests for /api/blogs and the /api/authors aggregate.
"""

import pytest

SEED_BLOGS = [
    {"author": "Jami Kousa", "title": "Clean React", "url": "https://example.org/1", "likes": 5},
    {"author": "Jami Kousa", "title": "Hooks in depth", "url": "https://example.org/2", "likes": 3},
    {"author": "Jami Kousa", "title": "Testing GraphQL", "url": "https://example.org/3", "likes": 2},
    {"author": "Kalle Ilves", "title": "Typescript basics", "url": "https://example.org/4", "likes": 2},
]


async def seed(client, header):
    created = []
    for blog in SEED_BLOGS:
        response = await client.post("/api/blogs", json=blog, headers=header)
        assert response.status_code == 201, response.text
        created.append(response.json())
    return created


class TestAuthors:

    @pytest.mark.asyncio
    async def test_authors_aggregate(self, test_client, auth_header):
        await seed(test_client, auth_header)

        response = await test_client.get("/api/authors")

        assert response.status_code == 200
        assert response.json() == [
            {"author": "Jami Kousa", "articles": 3, "likes": 10},
            {"author": "Kalle Ilves", "articles": 1, "likes": 2},
        ]

    @pytest.mark.asyncio
    async def test_no_blogs_no_authors(self, test_client):
        assert (await test_client.get("/api/authors")).json() == []


class TestBlogListing:

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive_over_title_and_author(self, test_client, auth_header):
        await seed(test_client, auth_header)

        by_author = (await test_client.get("/api/blogs?search=jami")).json()
        by_title = (await test_client.get("/api/blogs?search=typescript")).json()
        everything = (await test_client.get("/api/blogs?search=")).json()

        assert len(by_author) == 3
        assert [b["title"] for b in by_title] == ["Typescript basics"]
        assert len(everything) == 4

    @pytest.mark.asyncio
    async def test_sort_by_likes(self, test_client, auth_header):
        await seed(test_client, auth_header)

        blogs = (await test_client.get("/api/blogs?sort=likes")).json()

        assert [b["likes"] for b in blogs] == [5, 3, 2, 2]

    @pytest.mark.asyncio
    async def test_unknown_sort_is_400(self, test_client):
        assert (await test_client.get("/api/blogs?sort=title")).status_code == 400

    @pytest.mark.asyncio
    async def test_listing_projects_owner(self, test_client, auth_header):
        await seed(test_client, auth_header)

        blog = (await test_client.get("/api/blogs")).json()[0]

        assert "user_id" not in blog
        assert blog["user"] == {"name": "Matti Luukkainen"}


class TestBlogMutations:

    @pytest.mark.asyncio
    async def test_create_without_token_is_401(self, test_client):
        response = await test_client.post("/api/blogs", json=SEED_BLOGS[0])
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_update_likes(self, test_client, auth_header):
        blog = (await seed(test_client, auth_header))[0]

        response = await test_client.put(f"/api/blogs/{blog['id']}", json={"likes": 42})

        assert response.status_code == 200
        assert response.json()["likes"] == 42

    @pytest.mark.asyncio
    async def test_negative_likes_is_400(self, test_client, auth_header):
        blog = (await seed(test_client, auth_header))[0]

        response = await test_client.put(f"/api/blogs/{blog['id']}", json={"likes": -1})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_missing_is_404(self, test_client):
        assert (await test_client.put("/api/blogs/9999", json={"likes": 1})).status_code == 404

    @pytest.mark.asyncio
    async def test_only_creator_deletes(self, test_client, auth_header, other_auth_header):
        blog = (await seed(test_client, auth_header))[0]

        forbidden = await test_client.delete(f"/api/blogs/{blog['id']}", headers=other_auth_header)
        assert forbidden.status_code == 403
        assert (await test_client.get(f"/api/blogs/{blog['id']}")).status_code == 200

        deleted = await test_client.delete(f"/api/blogs/{blog['id']}", headers=auth_header)
        assert deleted.status_code == 204
        assert (await test_client.get(f"/api/blogs/{blog['id']}")).status_code == 404
