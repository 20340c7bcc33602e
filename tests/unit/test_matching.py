from core.matching import CandidateHit, MatchResult, MovieQuery, closest_title, loose_matches, match


def _hit(title, year, aka=(), critics=None, audience=None) -> CandidateHit:
    return CandidateHit(
        title=title,
        aka_titles=tuple(aka),
        release_year=year,
        critics_score=critics,
        audience_score=audience,
    )


def test_match_empty_candidates_is_no_match() -> None:
    result = match(MovieQuery("Heat", 1995), [])

    assert result == MatchResult.none()
    assert result.matched is False
    assert result.as_scores() == {"criticsScore": "", "audienceScore": ""}


def test_match_prefers_exact_year() -> None:
    candidates = [_hit("X", 2001, critics=1), _hit("X", 2000, critics=2)]

    result = match(MovieQuery("X", 2000), candidates)

    assert result.hit is candidates[1]
    assert result.critics_score == 2


def test_match_prefers_close_year_over_title() -> None:
    candidates = [
        _hit("Heat", 1990),
        _hit("Something Else", 1996, aka=["Heat"]),
    ]

    result = match(MovieQuery("Heat", 1995), candidates)

    assert result.hit is candidates[1]


def test_match_prefers_primary_title_when_years_are_far() -> None:
    candidates = [
        _hit("Something Else", 1995, aka=["X"]),
        _hit("X", 2005),
    ]

    result = match(MovieQuery("X", 2000), candidates)

    assert result.hit is candidates[1]


def test_match_falls_back_to_first_candidate() -> None:
    candidates = [
        _hit("Alias One", 1995, aka=["X"]),
        _hit("Alias Two", 2005, aka=["X"]),
    ]

    result = match(MovieQuery("X", 2000), candidates)

    assert result.hit is candidates[0]


def test_loose_filter_year_boundary() -> None:
    query = MovieQuery("Heat", 2000)

    assert loose_matches(query, [_hit("Heat", 2010)]) == []
    assert loose_matches(query, [_hit("Heat", 1990)]) == []
    assert len(loose_matches(query, [_hit("Heat", 2009)])) == 1
    assert len(loose_matches(query, [_hit("Heat", 1991)])) == 1


def test_loose_filter_rejects_unknown_year_and_other_titles() -> None:
    query = MovieQuery("Heat", 1995)

    assert loose_matches(query, [_hit("Heat", None)]) == []
    assert loose_matches(query, [_hit("Heath", 1995)]) == []


def test_match_end_to_end_digit_title() -> None:
    candidates = [_hit("Se7en", 1995, critics=79, audience=90)]

    result = match(MovieQuery("Seven", 1995), candidates)

    assert result.as_scores() == {"criticsScore": 79, "audienceScore": 90}


def test_match_accepts_raw_hits() -> None:
    hits = [
        "not a hit",
        {"releaseYear": 1995},
        {"title": "Heat", "releaseYear": "bad"},
        {
            "title": "Heat (1995)",
            "titles": ["Heat"],
            "aka": ["Heat: Extended"],
            "releaseYear": "1995",
            "rottenTomatoes": {"criticsScore": 83, "audienceScore": 94},
        },
    ]

    result = match(MovieQuery("Heat", 1995), hits)

    assert result.matched is True
    assert result.hit.aka_titles == ("Heat", "Heat: Extended")
    assert result.as_scores() == {"criticsScore": 83, "audienceScore": 94}


def test_match_without_scores_reports_empty_values() -> None:
    result = match(MovieQuery("Heat", 1995), [{"title": "Heat", "releaseYear": 1995, "rottenTomatoes": None}])

    assert result.matched is True
    assert result.as_scores() == {"criticsScore": "", "audienceScore": ""}


def test_match_keeps_zero_scores() -> None:
    result = match(MovieQuery("Heat", 1995), [_hit("Heat", 1995, critics=0, audience=0)])

    assert result.as_scores() == {"criticsScore": 0, "audienceScore": 0}


def test_match_is_deterministic() -> None:
    candidates = [_hit("Alias", 1996, aka=["Heat"]), _hit("Heat", 1999)]
    query = MovieQuery("Heat", 1995)

    assert match(query, candidates) == match(query, candidates)


def test_from_hit_tolerates_bad_shapes() -> None:
    assert CandidateHit.from_hit(None) == CandidateHit(title="")
    hit = CandidateHit.from_hit({"title": "Heat", "releaseYear": True, "titles": "Heat 95"})
    assert hit.release_year is None
    assert hit.aka_titles == ("Heat 95",)


def test_closest_title_reports_nearest_miss() -> None:
    candidates = [_hit("Heath", 1995), _hit("Cold", 1995)]

    hit, title, similarity = closest_title(MovieQuery("Heat", 1995), candidates)

    assert hit is candidates[0]
    assert title == "Heath"
    assert 0.0 < similarity < 1.0
    assert closest_title(MovieQuery("Heat", 1995), []) is None


def test_match_end_to_end_flat_hit_shape() -> None:
    hits = [{"title": "Se7en", "akaTitles": [], "releaseYear": 1995, "criticsScore": 79, "audienceScore": 90}]

    result = match(MovieQuery("Seven", 1995), hits)

    assert result.as_scores() == {"criticsScore": 79, "audienceScore": 90}


def test_match_flat_hit_aka_titles() -> None:
    hits = [{"title": "Les Sept", "akaTitles": ["Seven"], "releaseYear": 1995, "criticsScore": 79, "audienceScore": 90}]

    result = match(MovieQuery("Seven", 1995), hits)

    assert result.matched is True
    assert result.hit.aka_titles == ("Seven",)
    assert result.critics_score == 79


def test_match_rejects_hit_without_primary_title() -> None:
    hits = [
        {"titles": ["Heat"], "releaseYear": 1995, "rottenTomatoes": {"criticsScore": 1, "audienceScore": 2}},
        {"title": "", "akaTitles": ["Heat"], "releaseYear": 1995, "criticsScore": 3, "audienceScore": 4},
    ]

    assert match(MovieQuery("Heat", 1995), hits) == MatchResult.none()
    assert loose_matches(MovieQuery("Heat", 1995), [_hit("", 1995, aka=["Heat"])]) == []


def test_match_skips_titleless_hit_for_next_one() -> None:
    hits = [
        {"titles": ["Heat"], "releaseYear": 1995, "rottenTomatoes": {"criticsScore": 1, "audienceScore": 2}},
        {"title": "Heat", "releaseYear": 1995, "rottenTomatoes": {"criticsScore": 83, "audienceScore": 94}},
    ]

    assert match(MovieQuery("Heat", 1995), hits).critics_score == 83
