from pints.compass.repository import PoiRepository, distance_to
from pints.domain.models import GeoPoint, PointOfInterest

ORIGIN = GeoPoint(lat=51.5000, lon=-0.1200)


def _poi(poi_id: str, lat: float, lon: float, name: str | None = None) -> PointOfInterest:
    return PointOfInterest(id=poi_id, name=name, location=GeoPoint(lat=lat, lon=lon))


P1 = _poi("node/1", 51.5010, -0.1200, "Near")  # ~111m
P2 = _poi("node/2", 51.5100, -0.1200, "Far")  # ~1.1km
P3 = _poi("node/3", 51.5050, -0.1200, "Middle")  # ~556m


def test_empty_repository_resolves_nothing():
    repo = PoiRepository()
    assert repo.candidates is None
    assert repo.resolve_target(ORIGIN, None) is None
    assert repo.sorted_by_distance(ORIGIN) == []

    repo.replace_candidates([])
    assert repo.has_candidates
    assert repo.resolve_target(ORIGIN, "node/1") is None


def test_resolve_target_defaults_to_nearest():
    repo = PoiRepository()
    repo.replace_candidates([P2, P3, P1])
    assert repo.resolve_target(ORIGIN, None) == P1


def test_resolve_target_tie_goes_to_first_inserted():
    a = _poi("node/a", 51.5010, -0.1200)
    b = _poi("way/b", 51.5010, -0.1200)
    repo = PoiRepository()
    repo.replace_candidates([a, b])
    assert repo.resolve_target(ORIGIN, None).id == "node/a"
    repo.replace_candidates([b, a])
    assert repo.resolve_target(ORIGIN, None).id == "way/b"


def test_selection_wins_regardless_of_distance():
    repo = PoiRepository()
    repo.replace_candidates([P1, P2, P3])
    assert repo.resolve_target(ORIGIN, P2.id) == P2


def test_selection_falls_back_to_nearest_after_replacement():
    repo = PoiRepository()
    repo.replace_candidates([P1, P2, P3])
    repo.replace_candidates([P1, P3])
    assert repo.resolve_target(ORIGIN, P2.id) == P1

    # The same id coming back resolves again.
    repo.replace_candidates([P2, P3])
    assert repo.resolve_target(ORIGIN, P2.id) == P2


def test_selection_matches_by_id_not_value():
    renamed = _poi("node/2", 51.5100, -0.1200, "Renamed")
    repo = PoiRepository()
    repo.replace_candidates([P1, renamed])
    assert repo.resolve_target(ORIGIN, P2.id).name == "Renamed"


def test_sorted_by_distance_is_new_and_stable():
    repo = PoiRepository()
    repo.replace_candidates([P2, P3, P1])

    first = repo.sorted_by_distance(ORIGIN)
    second = repo.sorted_by_distance(ORIGIN)
    assert [p.id for p in first] == ["node/1", "node/3", "node/2"]
    assert first == second

    first.clear()
    assert [p.id for p in repo.candidates] == ["node/2", "node/3", "node/1"]


def test_sorted_by_distance_with_other_origin_does_not_touch_state():
    repo = PoiRepository()
    repo.replace_candidates([P1, P2, P3])
    far_north = GeoPoint(lat=51.6, lon=-0.12)

    assert [p.id for p in repo.sorted_by_distance(far_north)] == ["node/2", "node/3", "node/1"]
    assert [p.id for p in repo.sorted_by_distance(ORIGIN)] == ["node/1", "node/3", "node/2"]
    assert [p.id for p in repo.candidates] == ["node/1", "node/2", "node/3"]


def test_replace_candidates_takes_a_snapshot():
    source = [P1, P2]
    repo = PoiRepository()
    repo.replace_candidates(source)
    source.append(P3)
    assert len(repo.candidates) == 2


def test_distance_to_uses_poi_location():
    assert 100 < distance_to(ORIGIN, P1) < 125
