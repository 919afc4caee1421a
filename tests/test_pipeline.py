import pytest
from PIL import Image

from wallpaper_theme.infrastructure.network import SourceFetcher
from wallpaper_theme.processing.color import Color
from wallpaper_theme.processing.palette import FALLBACK_PALETTE, compose, rank_clusters, select_dominant
from wallpaper_theme.processing.pipeline import extract_palette, palette_from_buffer
from wallpaper_theme.processing.quantize import bucket_key, filter_and_quantize, luma, saturation
from wallpaper_theme.processing.sampler import PixelBuffer, downscaled_size, resample

from conftest import band_buffer, band_image, data_uri, solid_buffer


def test_luma_and_saturation_helpers():
    assert luma(255, 255, 255) == pytest.approx(255.0)
    assert saturation(0, 0, 0) == 0.0
    assert saturation(128, 128, 128) == 0.0
    assert saturation(200, 100, 50) == pytest.approx(0.75)


def test_bucket_key_floors_to_multiples_of_ten():
    assert bucket_key(255, 9, 10) == (250, 0, 10)
    assert bucket_key(199, 201, 0) == (190, 200, 0)


def test_filter_skips_transparent_pixels():
    assert filter_and_quantize(solid_buffer((255, 0, 0, 127))) == {}
    assert filter_and_quantize(solid_buffer((255, 0, 0, 128))) == {(250, 0, 0): pytest.approx(100.0)}


def test_filter_skips_dark_bright_and_gray_pixels():
    assert filter_and_quantize(solid_buffer((20, 20, 60, 255))) == {}
    assert filter_and_quantize(solid_buffer((250, 245, 240, 255))) == {}
    assert filter_and_quantize(solid_buffer((128, 128, 128, 255))) == {}


def test_weights_are_saturation_sums():
    buffer = band_buffer([(200, 100, 50, 255), (255, 0, 0, 255)], band_width=2, height=1)

    weights = filter_and_quantize(buffer)

    assert weights == {
        (200, 100, 50): pytest.approx(1.5),
        (250, 0, 0): pytest.approx(2.0),
    }


def test_bucket_keys_are_multiples_of_ten():
    buffer = band_buffer(
        [(123, 45, 67, 255), (201, 99, 13, 255), (77, 188, 254, 255)],
        band_width=1,
        height=1,
    )

    for key in filter_and_quantize(buffer):
        assert all(channel % 10 == 0 for channel in key)


def test_solid_color_falls_back():
    palette = palette_from_buffer(solid_buffer((255, 0, 0, 255)))

    assert palette is FALLBACK_PALETTE
    assert palette.is_fallback
    assert palette.to_hex() == {
        "primary": "#A78BFA",
        "secondary": "#818CF8",
        "accent": "#C084FC",
        "bg_gradient_start": "#1E1B4B",
        "bg_gradient_end": "#312E81",
    }


@pytest.mark.parametrize(
    "rgba",
    [(255, 0, 0, 0), (128, 128, 128, 255)],
    ids=["transparent", "gray"],
)
def test_unusable_images_fall_back(rgba):
    assert palette_from_buffer(solid_buffer(rgba)) is FALLBACK_PALETTE


def test_pure_blue_is_below_dark_cutoff():
    # Luma of #0000FF is about 29.07, so only two clusters survive.
    buffer = band_buffer([(255, 0, 0, 255), (0, 255, 0, 255), (0, 0, 255, 255)])

    assert len(filter_and_quantize(buffer)) == 2
    assert palette_from_buffer(buffer) is FALLBACK_PALETTE


def test_three_bands_yield_three_dominant_colors():
    buffer = band_buffer([(255, 0, 0, 255), (0, 255, 0, 255), (40, 40, 255, 255)])

    palette = palette_from_buffer(buffer)

    assert not palette.is_fallback
    assert palette.primary == Color(0, 250, 0)
    assert palette.secondary == Color(250, 0, 0)
    assert palette.accent == Color(40, 40, 250)
    assert palette.bg_gradient_start == Color(0, 75, 0)
    assert palette.bg_gradient_end == Color(100, 0, 0)


def test_equal_weights_break_ties_by_lowest_key():
    weights = {(250, 0, 250): 5.0, (250, 0, 0): 5.0, (0, 250, 0): 5.0, (10, 10, 10): 1.0}

    ranked = rank_clusters(weights)

    assert ranked == (Color(0, 250, 0), Color(250, 0, 0), Color(250, 0, 250), Color(10, 10, 10))


def test_rank_clusters_keeps_top_ten():
    weights = {(index * 10, 0, 0): float(index) for index in range(15)}

    ranked = rank_clusters(weights)

    assert len(ranked) == 10
    assert ranked[0] == Color(140, 0, 0)


def test_select_dominant_records_ranking():
    weights = {(10, 20, 30): 3.0, (40, 50, 60): 2.0, (70, 80, 90): 1.0, (100, 110, 120): 0.5}

    palette = select_dominant(weights)

    assert [palette.primary, palette.secondary, palette.accent] == list(palette.ranked[:3])
    assert len(palette.ranked) == 4


def test_compose_scales_primary_and_secondary():
    start, end = compose(Color(250, 100, 10), Color(250, 100, 10))

    assert start == Color(75, 30, 3)
    assert end == Color(100, 40, 4)


def test_full_pipeline_is_deterministic():
    buffer = band_buffer([(200, 60, 60, 255), (60, 200, 60, 255), (60, 60, 200, 255), (220, 180, 40, 255)])

    assert palette_from_buffer(buffer) == palette_from_buffer(buffer)


def test_downscaled_size_has_floor_of_one():
    assert downscaled_size(5, 5, 0.1) == (1, 1)
    assert downscaled_size(1920, 1080, 0.1) == (192, 108)
    assert downscaled_size(25, 19, 0.1) == (2, 1)


def test_resample_returns_rgba_buffer():
    buffer = resample(Image.new("RGB", (40, 20), (10, 200, 30)), 0.1)

    assert (buffer.width, buffer.height) == (4, 2)
    assert buffer.data == bytes((10, 200, 30, 255)) * 8


def test_pixel_buffer_rejects_wrong_length():
    with pytest.raises(ValueError):
        PixelBuffer(2, 2, b"\x00" * 15)


def test_extract_palette_from_data_uri(rgb_bands_uri):
    palette = extract_palette(rgb_bands_uri, fetcher=SourceFetcher(), scale=0.1)

    assert {palette.primary, palette.secondary, palette.accent} == {
        Color(250, 0, 0),
        Color(0, 250, 0),
        Color(40, 40, 250),
    }


def test_extract_palette_solid_image_falls_back():
    uri = data_uri(band_image([(255, 0, 0)]))

    assert extract_palette(uri, fetcher=SourceFetcher(), scale=0.1) is FALLBACK_PALETTE
