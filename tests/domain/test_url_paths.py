from __future__ import annotations

import logging

import pytest

from rewritesync.domain.model import Category, EntityType, RedirectType
from rewritesync.domain.reconciliation import decode_metadata
from rewritesync.domain.url_paths import (
    CandidateSet,
    ProductUrlPathGenerator,
    build_candidates,
    product_target_path,
)
from tests.helpers.rewrites import (
    MEN,
    ROOT_CATEGORY,
    SHIRTS,
    FakeCategoryLookup,
    make_product,
    make_rewrite,
)


def _generator(url_key: str = "new-shirt", *, suffix: str = ".html") -> ProductUrlPathGenerator:
    return ProductUrlPathGenerator(
        product=make_product(url_key),
        root_category_id=ROOT_CATEGORY.id,
        url_suffix=suffix,
    )


def test_root_category_path_is_the_bare_url_key() -> None:
    path, metadata = _generator().compute_path_and_metadata(ROOT_CATEGORY)

    assert path == "new-shirt.html"
    assert metadata == {"category_id": ROOT_CATEGORY.id}


def test_category_path_prefixes_the_category_url_path() -> None:
    assert _generator().request_path(SHIRTS) == "men/shirts/new-shirt.html"
    assert _generator(suffix="").request_path(MEN) == "men/new-shirt"


def test_category_without_url_path_falls_back_to_leaf() -> None:
    bare = Category(id=30, url_path="  ", parent_id=2)

    assert _generator().request_path(bare) == "new-shirt.html"


def test_product_target_path_includes_category_only_below_root() -> None:
    product = make_product()

    assert product_target_path(product) == "catalog/product/view/id/99"
    assert (
        product_target_path(product, ROOT_CATEGORY, root_category_id=ROOT_CATEGORY.id)
        == "catalog/product/view/id/99"
    )
    assert product_target_path(product, MEN) == "catalog/product/view/id/99/category/10"


def test_build_candidates_creates_root_and_category_rewrites_per_store() -> None:
    product = make_product(store_ids=(1, 2), category_ids=(MEN.id, SHIRTS.id))
    generator = ProductUrlPathGenerator(product=product, root_category_id=ROOT_CATEGORY.id)

    candidates = build_candidates(product, FakeCategoryLookup(), generator)

    assert [(record.store_id, record.request_path) for record in candidates] == [
        (1, "new-shirt.html"),
        (1, "men/new-shirt.html"),
        (1, "men/shirts/new-shirt.html"),
        (2, "new-shirt.html"),
        (2, "men/new-shirt.html"),
        (2, "men/shirts/new-shirt.html"),
    ]
    first = next(iter(candidates))
    assert first.entity_type is EntityType.PRODUCT
    assert first.entity_id == 99
    assert first.is_autogenerated is True
    assert first.redirect_type is RedirectType.NONE
    assert first.primary_key is None
    assert decode_metadata(first.metadata) == {"category_id": ROOT_CATEGORY.id}


def test_parentless_category_is_scoped_like_any_other() -> None:
    orphan = Category(id=10, url_path="men", parent_id=None)
    product = make_product(category_ids=(orphan.id,))
    generator = ProductUrlPathGenerator(product=product, root_category_id=ROOT_CATEGORY.id)

    candidates = build_candidates(product, FakeCategoryLookup((orphan,)), generator)

    assert [(record.request_path, record.target_path) for record in candidates] == [
        ("new-shirt.html", "catalog/product/view/id/99"),
        ("men/new-shirt.html", "catalog/product/view/id/99/category/10"),
    ]
    assert product_target_path(product, orphan, root_category_id=ROOT_CATEGORY.id).endswith(
        "/category/10"
    )


def test_build_candidates_skips_unknown_and_duplicate_categories(
    caplog: pytest.LogCaptureFixture,
) -> None:
    product = make_product(category_ids=(MEN.id, 404, MEN.id, ROOT_CATEGORY.id))
    generator = ProductUrlPathGenerator(product=product, root_category_id=ROOT_CATEGORY.id)

    with caplog.at_level(logging.WARNING):
        candidates = build_candidates(product, FakeCategoryLookup(), generator)

    assert [record.request_path for record in candidates] == [
        "new-shirt.html",
        "men/new-shirt.html",
    ]
    assert "unknown category 404" in caplog.text


def test_product_without_stores_has_no_candidates() -> None:
    product = make_product(store_ids=())
    generator = ProductUrlPathGenerator(product=product, root_category_id=ROOT_CATEGORY.id)

    assert len(build_candidates(product, FakeCategoryLookup(), generator)) == 0


def test_candidate_set_answers_replacements_by_category() -> None:
    root = make_rewrite("new-shirt.html", category_id=ROOT_CATEGORY.id)
    men_store_1 = make_rewrite("men/new-shirt.html", category_id=MEN.id)
    men_store_2 = make_rewrite("men/new-shirt.html", store_id=2, category_id=MEN.id)
    unscoped = make_rewrite("legacy.html", metadata="garbage")

    candidates = CandidateSet((root, men_store_1, men_store_2, unscoped))

    assert candidates.replacement_for(MEN.id) is men_store_1
    assert candidates.replacement_for(ROOT_CATEGORY.id) is root
    assert candidates.replacement_for(SHIRTS.id) is None
    assert candidates.category_ids() == (ROOT_CATEGORY.id, MEN.id)
    assert len(candidates) == 4
