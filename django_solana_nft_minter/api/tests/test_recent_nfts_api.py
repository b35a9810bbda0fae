from dataclasses import replace

import pytest
from rest_framework.test import APIClient

from django_solana_nft_minter.stores import get_recent_nft_store

pytestmark = pytest.mark.django_db


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture(autouse=True)
def api_test_settings(settings):
    settings.ROOT_URLCONF = "django_solana_nft_minter.urls"


def test_recent_nfts_lists_owner_nfts_newest_first(api_client, minted_nft):
    store = get_recent_nft_store()
    store.append(minted_nft)
    store.append(replace(minted_nft, mint_address="mint-2", name="Second"))
    store.append(replace(minted_nft, mint_address="mint-3", environment="mainnet"))

    response = api_client.get("/nfts/", {"owner": minted_nft.owner_address})

    assert response.status_code == 200
    assert [nft["mint_address"] for nft in response.data] == [
        "mint-2",
        minted_nft.mint_address,
    ]
    assert response.data[0]["name"] == "Second"
    assert response.data[0]["created"] is not None


def test_recent_nfts_filters_by_environment_and_limit(api_client, minted_nft):
    store = get_recent_nft_store()
    store.append(replace(minted_nft, mint_address="mint-1", environment="mainnet"))
    store.append(replace(minted_nft, mint_address="mint-2", environment="mainnet"))

    response = api_client.get(
        "/nfts/",
        {"owner": minted_nft.owner_address, "environment": "mainnet", "limit": 1},
    )

    assert response.status_code == 200
    assert [nft["mint_address"] for nft in response.data] == ["mint-2"]


def test_recent_nfts_returns_empty_list_for_unknown_owner(api_client):
    response = api_client.get(
        "/nfts/", {"owner": "So11111111111111111111111111111111111111112"}
    )

    assert response.status_code == 200
    assert response.data == []


@pytest.mark.parametrize(
    "params, field",
    [
        ({}, "owner"),
        ({"owner": "not-an-address"}, "owner"),
        ({"owner": "11111111111111111111111111111111", "environment": "x"}, "environment"),
        ({"owner": "11111111111111111111111111111111", "limit": 0}, "limit"),
    ],
)
def test_recent_nfts_validates_query(api_client, params, field):
    response = api_client.get("/nfts/", params)

    assert response.status_code == 400
    assert field in response.data
