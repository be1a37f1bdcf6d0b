import cv2
import numpy as np
import pytest

from screenshot_compare import (
    robust_similarity,
    save_comparison_report,
    load_and_align,
    pixel_similarity,
    histogram_similarity,
)
from screenshot_compare.errors import LoadFailure, WriteFailure
from screenshot_compare.models.comparison_result import ComparisonMethod
from screenshot_compare.services.comparison_service import ComparisonService

from image_factory import solid, blocks, mug_photo, lamp_photo, thumbnail, BLACK, WHITE, RED


@pytest.fixture
def product_screenshots(write_image):
    full = mug_photo(1200)
    return {
        "thumb": write_image("search_result.png", thumbnail(full, 200)),
        "detail": write_image("product_detail.png", full),
        "other": write_image("other_product.png", lamp_photo(1200)),
    }


def test_thumbnail_matches_detail_image(product_screenshots):
    result = robust_similarity(product_screenshots["thumb"], product_screenshots["detail"])
    assert result.method is ComparisonMethod.ROBUST
    assert result.value > 80.0


def test_distinct_products_do_not_match(product_screenshots):
    result = robust_similarity(product_screenshots["thumb"], product_screenshots["other"])
    assert result.value < 50.0


def test_resize_before_diff(write_image):
    small = blocks(64, 64, 8, seed=1)
    upscaled = cv2.resize(small, (128, 128), interpolation=cv2.INTER_NEAREST)
    unrelated = blocks(64, 64, 8, seed=2)

    service = ComparisonService()
    same = service.pixel_similarity(write_image("small.png", small), write_image("big.png", upscaled))
    other = service.pixel_similarity(write_image("small2.png", small), write_image("other.png", unrelated))
    assert same.value >= 99.0
    assert same.value - other.value > 50.0


@pytest.mark.parametrize("make_pair", [
    lambda: (mug_photo(200), mug_photo(200)),
    lambda: (mug_photo(200), lamp_photo(300)),
    lambda: (solid(40, 40, BLACK), solid(40, 40, WHITE)),
    lambda: (blocks(64, 64, 8, seed=5), blocks(64, 64, 8, seed=6)),
    lambda: (thumbnail(mug_photo(600), 100), mug_photo(600)),
])
def test_robust_dominates_both_metrics(write_image, make_pair):
    a, b = make_pair()
    path_a, path_b = write_image("a.png", a), write_image("b.png", b)

    service = ComparisonService()
    robust = service.robust_similarity(path_a, path_b)
    pixel = service.pixel_similarity(path_a, path_b)
    histogram = service.histogram_similarity(path_a, path_b)

    assert robust.value >= pixel.value
    assert robust.value >= histogram.value
    assert robust.value == max(pixel.value, histogram.value)


def test_function_api_matches_service(write_image):
    path_a = write_image("a.png", mug_photo(90))
    path_b = write_image("b.png", lamp_photo(90))
    img_a, img_b = load_and_align(path_a, path_b)

    service = ComparisonService()
    assert pixel_similarity(img_a, img_b).value == service.pixel_similarity(path_a, path_b).value
    assert histogram_similarity(img_a, img_b).value == pytest.approx(
        service.histogram_similarity(path_a, path_b).value
    )


def test_report_writes_color_difference(tmp_path, write_image):
    a = solid(20, 10, (10, 20, 30))
    b = a.copy()
    b[:, :10] = (15, 20, 90)
    out = tmp_path / "diff.png"

    result = save_comparison_report(write_image("a.png", a), write_image("b.png", b), out)

    assert result.artifact_path == out
    assert result.value == pytest.approx(50.0)
    diff = cv2.imread(str(out))
    assert diff.shape == a.shape
    assert tuple(diff[0, 0]) == (5, 0, 60)
    assert tuple(diff[0, 15]) == (0, 0, 0)


def test_report_aligns_second_image(tmp_path, write_image):
    out = tmp_path / "diff.png"
    save_comparison_report(write_image("a.png", mug_photo(100)), write_image("b.png", mug_photo(300)), out)
    assert cv2.imread(str(out)).shape == (100, 100, 3)


def test_report_overwrites_existing_file(tmp_path, write_image):
    out = tmp_path / "diff.png"
    out.write_bytes(b"stale")
    path = write_image("a.png", solid(8, 8, RED))
    result = save_comparison_report(path, path, out)
    assert result.value == 100.0
    assert not np.any(cv2.imread(str(out)))


def test_report_does_not_create_directories(tmp_path, write_image):
    path = write_image("a.png", solid(8, 8, RED))
    out = tmp_path / "reports" / "diff.png"
    with pytest.raises(WriteFailure) as exc:
        save_comparison_report(path, path, out)
    assert exc.value.path == out
    assert not out.parent.exists()


def test_report_unknown_format(tmp_path, write_image):
    path = write_image("a.png", solid(8, 8, RED))
    with pytest.raises(WriteFailure):
        save_comparison_report(path, path, tmp_path / "diff.notaformat")


@pytest.mark.parametrize("call", [
    lambda service, real, missing, tmp: service.pixel_similarity(real, missing),
    lambda service, real, missing, tmp: service.histogram_similarity(missing, real),
    lambda service, real, missing, tmp: service.robust_similarity(real, missing),
    lambda service, real, missing, tmp: service.robust_similarity(missing, real),
    lambda service, real, missing, tmp: service.save_comparison_report(real, missing, tmp / "d.png"),
])
def test_missing_path_is_always_a_load_failure(tmp_path, write_image, call):
    real = write_image("real.png", solid(8, 8, RED))
    missing = tmp_path / "does_not_exist.png"
    for _ in range(2):
        with pytest.raises(LoadFailure):
            call(ComparisonService(), real, missing, tmp_path)
    assert not (tmp_path / "d.png").exists()


def test_breakdown_matches_individual_scores(product_screenshots):
    service = ComparisonService()
    scores = service.breakdown(product_screenshots["thumb"], product_screenshots["detail"])

    assert scores.robust.value == max(scores.pixel.value, scores.histogram.value)
    assert scores.pixel.value == service.pixel_similarity(
        product_screenshots["thumb"], product_screenshots["detail"]
    ).value
    assert scores.histogram.value == pytest.approx(service.histogram_similarity(
        product_screenshots["thumb"], product_screenshots["detail"]
    ).value)
