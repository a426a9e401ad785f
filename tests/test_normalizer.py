import pytest

from core.models import Sauce
from core.utils import normalize_image_url, normalize_sauce, normalize_sauces


def make_sauce(**overrides) -> Sauce:
    data = {
        "_id": "s1", "userId": "u1", "name": "Tabasco", "manufacturer": "McIlhenny",
        "description": "Classic red", "mainPepper": "Tabasco pepper",
        "imageUrl": "http://cdn.example.com/images/tabasco.png", "heat": 5,
        "likes": 2, "dislikes": 1, "usersLiked": ["u1", "u2"], "usersDisliked": ["u3"],
    }
    data.update(overrides)
    return Sauce.model_validate(data)


# --- normalize_image_url ---
@pytest.mark.parametrize("url, expected", [
    ("http://x/a.png", "https://x/a.png"),
    ("http://cdn/x.png", "https://cdn/x.png"),
    ("http://localhost:3000/images/hot.jpg?v=2", "https://localhost:3000/images/hot.jpg?v=2"),
])
def test_insecure_prefix_replaced(url, expected):
    assert normalize_image_url(url) == expected


@pytest.mark.parametrize("url", [
    "https://x/a.png",
    "/images/a.png",
    "images/a.png",
    "",
    None,
    "ftp://x/a.png",
    "HTTP://x/a.png", # only the exact lowercase prefix is rewritten
])
def test_other_forms_untouched(url):
    assert normalize_image_url(url) == url


def test_only_leading_prefix_replaced():
    url = "http://proxy/?target=http://origin/a.png"
    assert normalize_image_url(url) == "https://proxy/?target=http://origin/a.png"


@pytest.mark.parametrize("url", ["http://x/a.png", "https://x/a.png", "/a.png", "", None])
def test_normalization_is_idempotent(url):
    once = normalize_image_url(url)
    assert normalize_image_url(once) == once


# --- normalize_sauce / normalize_sauces ---
def test_normalize_sauce_changes_only_image_url():
    sauce = make_sauce()
    normalized = normalize_sauce(sauce)

    assert normalized.image_url == "https://cdn.example.com/images/tabasco.png"
    before = sauce.model_dump(exclude={"image_url"})
    after = normalized.model_dump(exclude={"image_url"})
    assert before == after
    # input left as it was
    assert sauce.image_url == "http://cdn.example.com/images/tabasco.png"


def test_normalize_sauce_without_image_url():
    sauce = Sauce(name="Plain")
    assert normalize_sauce(sauce).image_url is None


def test_normalize_sauces_mixed_list():
    sauces = [
        make_sauce(imageUrl="http://a/1.png"),
        make_sauce(imageUrl="https://a/2.png"),
        make_sauce(imageUrl="/local/3.png"),
    ]
    result = normalize_sauces(sauces)
    assert [s.image_url for s in result] == ["https://a/1.png", "https://a/2.png", "/local/3.png"]
    assert normalize_sauces(result) == result


def test_normalize_sauces_empty():
    assert normalize_sauces([]) == []
