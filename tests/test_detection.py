from heic_converter.detection import has_suffix


def test_has_suffix_is_case_insensitive() -> None:
    assert has_suffix("x.heic")
    assert has_suffix("x.HeIC")


def test_has_suffix_only_checks_the_end_of_the_name() -> None:
    assert not has_suffix("x.heif")
    assert not has_suffix("heic.jpg")
    assert not has_suffix("README")


def test_has_suffix_with_custom_suffix() -> None:
    assert has_suffix("x.HEIF", ".heif")
    assert not has_suffix("x.heic", ".heif")
