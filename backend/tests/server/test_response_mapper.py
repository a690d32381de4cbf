"""Response mapper tests - Outcome -> HttpResponse.

Tests cover:
    - Status fixed by the variant class
    - Body-less variants: empty body, no headers
    - JSON variants: content-type set, wire names, unset optionals omitted
    - Wrong or unencodable payloads raise ResponseSerializationError
"""

import json

import pytest

from conduit import models
from conduit.apis import outcomes
from conduit.core.errors import ResponseSerializationError
from conduit.server.response_mapper import encode_payload, map_outcome


async def test_bodyless_variant_maps_to_empty_response():
    response = await map_outcome(outcomes.Status401Unauthorized())
    assert response.status_code == 401
    assert response.body == b""
    assert response.headers == ()


async def test_json_variant_sets_content_type_and_status(samples):
    outcome = outcomes.Status201User(models.Login200Response(user=samples.user()))
    response = await map_outcome(outcome)
    assert response.status_code == 201
    assert response.header("Content-Type") == "application/json"
    assert json.loads(response.body)["user"]["username"] == "jake"


async def test_status_comes_from_class_not_payload(samples):
    payload = models.SingleArticleResponse(article=samples.article())
    created = await map_outcome(outcomes.Status201SingleArticle(payload))
    fetched = await map_outcome(outcomes.Status200SingleArticle(payload))
    assert (created.status_code, fetched.status_code) == (201, 200)
    assert created.body == fetched.body


def test_encoding_uses_wire_names(samples):
    payload = models.MultipleArticlesResponse(
        articles=[samples.list_item()], articles_count=1,
    )
    data = json.loads(encode_payload(models.MultipleArticlesResponse, payload))
    assert data["articlesCount"] == 1
    assert set(data["articles"][0]) >= {"tagList", "createdAt", "favoritesCount"}


def test_encoding_omits_unset_optionals():
    payload = models.UpdateArticleRequest(
        article=models.UpdateArticle(title="only the title"),
    )
    data = json.loads(encode_payload(models.UpdateArticleRequest, payload))
    assert data == {"article": {"title": "only the title"}}


def test_wrong_payload_model_fails_loudly(samples):
    with pytest.raises(ResponseSerializationError):
        encode_payload(models.TagsResponse, models.ProfileResponse(
            profile=samples.profile(),
        ))


async def test_unencodable_payload_raises_from_map_outcome():
    outcome = outcomes.Status200Tags(
        models.TagsResponse.model_construct(tags=[object()]),
    )
    with pytest.raises(ResponseSerializationError) as exc_info:
        await map_outcome(outcome)
    assert exc_info.value.to_http().body == b""
    assert exc_info.value.http_status == 500
