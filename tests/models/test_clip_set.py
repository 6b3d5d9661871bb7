import random

from clipscribe.models.clip_set import ClipSet


def test_from_analysis_selects_every_clip_and_keeps_order(sample_clips):
    clips = ClipSet.from_analysis(sample_clips)
    assert [c.id for c in clips] == ["c1", "c2"]
    assert all(c.is_selected for c in clips)
    assert clips.selected_count() == 2


def test_toggle_returns_new_set_and_leaves_original(sample_clips):
    original = ClipSet.from_analysis(sample_clips)
    toggled = original.toggle("c1")

    assert toggled is not original
    assert original.get("c1").is_selected is True
    assert toggled.get("c1").is_selected is False
    assert toggled.ids() == original.ids()


def test_toggle_unknown_id_is_noop(sample_clips):
    clips = ClipSet.from_analysis(sample_clips)
    assert clips.toggle("missing") is clips
    assert clips.toggle("missing") == clips


def test_selected_views_do_not_mutate(sample_clips):
    clips = ClipSet.from_analysis(sample_clips).toggle("c2")
    before = clips.clips

    assert [c.title for c in clips.selected()] == ["Intro"]
    assert clips.selected_count() == 1
    assert clips.clips == before
    assert len(clips) == 2


def test_selected_count_matches_odd_toggle_counts(make_clip):
    ids = [f"c{i}" for i in range(8)]
    clips = ClipSet.from_analysis(make_clip(i) for i in ids)
    rng = random.Random(7)
    toggles = {i: 0 for i in ids}

    for _ in range(50):
        clip_id = rng.choice(ids + ["ghost"])
        clips = clips.toggle(clip_id)
        if clip_id in toggles:
            toggles[clip_id] += 1

    expected = sum(1 for count in toggles.values() if count % 2 == 0)
    assert clips.selected_count() == expected
    assert clips.ids() == ids
