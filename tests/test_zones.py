from templates import TemplateName, normalize_template_name, get_template_options
from zones import (
    ZONE_REGISTRY, DEFAULT_TEXT_ZONE, ZoneKind, get_zones, find_zone,
    in_text_zone, in_photo_zone,
)


def test_every_template_has_zones():
    for template in TemplateName:
        zones = ZONE_REGISTRY[template]
        assert zones[0].kind == ZoneKind.TEXT
        assert any(z.kind == ZoneKind.PHOTO for z in zones)
        for z in zones:
            assert 0 <= z.x1 < z.x2 <= 100
            assert 0 <= z.y1 < z.y2 <= 100


def test_containment_is_inclusive():
    assert in_text_zone(TemplateName.COLLAGE, 15, 75)
    assert in_text_zone(TemplateName.COLLAGE, 85, 95)
    assert not in_text_zone(TemplateName.COLLAGE, 14.9, 80)


def test_text_zone_found_before_overlapping_photo_zone():
    # (20, 78) is inside both the caption and the bottom-left photo on collage
    assert in_photo_zone(TemplateName.COLLAGE, 20, 78)
    zone = find_zone(TemplateName.COLLAGE, 20, 78, ZoneKind.TEXT)
    assert zone is not None
    assert (zone.x1, zone.y1, zone.x2, zone.y2) == (15, 75, 85, 95)


def test_unknown_template_has_default_text_zone_only():
    assert get_zones("grid") == (DEFAULT_TEXT_ZONE,)
    assert not in_photo_zone("grid", 50, 50)


def test_normalize_template_name():
    assert normalize_template_name("Polaroid_Stack") == TemplateName.POLAROID_STACK
    assert normalize_template_name(" scrapbook mixed ") == TemplateName.SCRAPBOOK_MIXED
    assert normalize_template_name("MAGAZINE") == TemplateName.MAGAZINE
    assert normalize_template_name("grid") is None
    assert normalize_template_name(None) is None


def test_template_options():
    options = get_template_options()
    assert [o["id"] for o in options] == [t.value for t in TemplateName]
