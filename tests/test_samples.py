"""Tests for the generated sample images."""

import io

import pytest
from PIL import Image

from moonjify.gif import read_gif
from moonjify.samples import SAMPLE_IMAGES, SampleImage, checkerboard, get_sample, gradient


class TestSamples:
    """Tests for the sample catalogue."""

    def test_both_kinds_available(self) -> None:
        kinds = {sample.kind for sample in SAMPLE_IMAGES.values()}
        assert kinds == {'static', 'animated'}

    def test_original_gallery_present(self) -> None:
        for sample_id in ('gradient', 'mountains', 'circles', 'checkerboard', 'spiral'):
            assert sample_id in SAMPLE_IMAGES

    @pytest.mark.parametrize('sample', list(SAMPLE_IMAGES.values()), ids=lambda s: s.id)
    def test_encodes(self, sample: SampleImage) -> None:
        data = sample.to_bytes()
        if sample.is_animated:
            assert read_gif(data).is_animated
        else:
            with Image.open(io.BytesIO(data)) as image:
                assert image.format == 'PNG'
                assert image.size == (200, 200)

    def test_gradient_runs_dark_to_light(self) -> None:
        image = gradient((64, 4)).convert('L')
        assert image.getpixel((0, 0)) == 0
        assert image.getpixel((63, 0)) == 255

    def test_checkerboard_alternates(self) -> None:
        image = checkerboard((80, 80), squares=8).convert('L')
        assert image.getpixel((5, 5)) != image.getpixel((15, 5))
        assert image.getpixel((5, 5)) == image.getpixel((15, 15))

    def test_unknown_sample(self) -> None:
        with pytest.raises(ValueError, match='available'):
            get_sample('nope')
