import pytest

from draft_assistant.models import RosterSlot
from draft_assistant.services.recommendations import (
    adp_round,
    build_recommendation_report,
    build_roster,
    bye_conflicts,
    is_excluded,
    positional_breakdown,
    position_counts,
    position_needs,
    recommend,
    score_player,
    stack_opportunities,
    tier_drops,
)
from tests.factories import make_player, make_record, make_state


def _slot(name, position, team="KC", bye=0, rank=None, pick_number=1):
    return RosterSlot(
        name=name,
        position=position,
        team=team,
        pick_number=pick_number,
        draft_round=1,
        rank=rank,
        bye=bye,
        matched=rank is not None,
    )


def test_position_needs_with_two_running_backs():
    roster = [_slot("RB One", "RB"), _slot("RB Two", "RB")]

    assert position_needs(position_counts(roster)) == {
        "QB": 1,
        "RB": 0,
        "WR": 2,
        "TE": 1,
        "K": 1,
        "D": 1,
    }


def test_needs_never_go_negative():
    roster = [_slot(f"QB {i}", "QB") for i in range(3)]
    assert position_needs(position_counts(roster))["QB"] == 0


def test_bye_conflicts_ignore_unknown_weeks():
    roster = [_slot("A", "RB", bye=6), _slot("B", "WR", bye=6), _slot("C", "TE", bye=0)]
    assert bye_conflicts(roster) == {6: 2}


def test_score_combines_all_six_terms():
    roster = [
        _slot("Patrick Mahomes", "QB", team="KC", bye=6),
        _slot("Bijan Robinson", "RB", team="ATL", bye=9),
    ]
    counts = position_counts(roster)
    rice = make_player("Rashee Rice", "WR", 40, team="KC", bye=6, adp="3.05")

    score = score_player(rice, roster, position_needs(counts), 4, counts, bye_conflicts(roster))

    assert score.breakdown.position_need == 60
    assert score.breakdown.rank_quality == 20
    assert score.breakdown.adp_value == 7
    assert score.breakdown.stacking == 15
    assert score.breakdown.bye_week == 5
    assert score.breakdown.team_balance == 8
    assert score.total == 115
    assert score.reasons == [
        "Need 2 more WR",
        "Ranked #40 overall",
        "Stacks with Patrick Mahomes (KC)",
    ]


@pytest.mark.parametrize(
    "adp, current_round, points",
    [("3.05", 5, 10), ("3.05", 4, 7), ("3.05", 3, 5), ("3.05", 2, 2), ("3.05", 1, 0), ("", 5, 0), (35, 5, 0)],
)
def test_adp_value_term(adp, current_round, points):
    player = make_player("Somebody", "RB", 300, adp=adp)
    score = score_player(player, [], position_needs({}), current_round, {}, {})

    assert score.breakdown.adp_value == points


def test_rank_quality_floors_at_zero():
    player = make_player("Deep Sleeper", "WR", 250)
    assert score_player(player, [], {}, 1, {}, {}).breakdown.rank_quality == 0


def test_stacking_only_applies_to_pass_catchers():
    roster = [_slot("Patrick Mahomes", "QB", team="KC")]
    counts = position_counts(roster)
    rb = make_player("Isiah Pacheco", "RB", 50, team="KC")
    te = make_player("Travis Kelce", "TE", 20, team="KC")

    assert score_player(rb, roster, {}, 3, counts, {}).breakdown.stacking == 0
    assert score_player(te, roster, {}, 3, counts, {}).breakdown.stacking == 15


def test_two_same_team_quarterbacks_do_not_double_stack():
    roster = [_slot("QB One", "QB", team="KC"), _slot("QB Two", "QB", team="KC")]
    wr = make_player("Rashee Rice", "WR", 40, team="KC")

    assert score_player(wr, roster, {}, 3, position_counts(roster), {}).breakdown.stacking == 15


def test_bye_week_term():
    wr = make_player("Receiver", "WR", 30, bye=7)

    assert score_player(wr, [], {}, 1, {}, {}).breakdown.bye_week == 10
    assert score_player(wr, [], {}, 1, {}, {7: 1}).breakdown.bye_week == 5
    assert score_player(wr, [], {}, 1, {}, {7: 2}).breakdown.bye_week == 0


def test_team_balance_term():
    qb = make_player("Quarterback", "QB", 30)
    wr = make_player("Receiver", "WR", 30)

    assert score_player(qb, [], {}, 1, {"QB": 0}, {}).breakdown.team_balance == 10
    assert score_player(qb, [], {}, 1, {"QB": 1}, {}).breakdown.team_balance == 0
    assert score_player(wr, [], {}, 1, {"WR": 1}, {}).breakdown.team_balance == 8
    assert score_player(wr, [], {}, 1, {"WR": 2, "RB": 3}, {}).breakdown.team_balance == 5
    assert score_player(wr, [], {}, 1, {"WR": 3, "RB": 3}, {}).breakdown.team_balance == 0


def test_scoring_is_deterministic():
    roster = [_slot("Patrick Mahomes", "QB", team="KC", bye=6)]
    counts = position_counts(roster)
    player = make_player("Rashee Rice", "WR", 40, team="KC", bye=6, adp="3.05")
    args = (player, roster, position_needs(counts), 4, counts, bye_conflicts(roster))

    assert score_player(*args) == score_player(*args)


@pytest.mark.parametrize(
    "position, current_round, excluded",
    [("K", 13, True), ("K", 14, False), ("D", 12, True), ("D", 13, False), ("QB", 1, False)],
)
def test_kicker_and_defense_exclusions(position, current_round, excluded):
    assert is_excluded(make_player("X", position, 100), current_round) is excluded


def test_recommend_returns_top_six_without_early_kickers():
    available = [make_player(f"RB {i}", "RB", i) for i in range(1, 9)]
    available.append(make_player("Kicker", "K", 9))

    picks = recommend(available, [], current_round=1)

    assert len(picks) == 6
    assert all(r.player.position != "K" for r in picks)
    totals = [r.score.total for r in picks]
    assert totals == sorted(totals, reverse=True)


def test_recommend_ties_go_to_better_rank_then_catalog_order():
    first = make_player("First", "WR", 10)
    second = make_player("Second", "WR", 10)
    better = make_player("Better", "WR", 9)
    # Same score once rank quality is floored away
    deep_a = make_player("Deep A", "TE", 300)
    deep_b = make_player("Deep B", "TE", 250)

    names = [r.player.name for r in recommend([second, first, better, deep_a, deep_b], [], 1)]

    assert names[:3] == ["Better", "Second", "First"]
    assert names[3:] == ["Deep B", "Deep A"]


def test_tier_drops():
    available = [
        make_player("QB A", "QB", 1, tier=1),
        make_player("QB B", "QB", 2, tier=1),
        make_player("QB C", "QB", 3, tier=3),
        make_player("RB A", "RB", 4, tier=1),
        make_player("RB B", "RB", 5, tier=2),
        *[make_player(f"WR {i}", "WR", 10 + i, tier=2) for i in range(4)],
        make_player("WR Late", "WR", 60, tier=5),
        make_player("TE Only", "TE", 70, tier=4),
    ]

    alerts = tier_drops(available)

    assert set(alerts) == {"QB"}
    qb = alerts["QB"]
    assert (qb.current_tier, qb.next_tier, qb.players_until_drop) == (1, 3, 2)
    assert qb.next_pick_in_range


def test_positional_breakdown_orderings():
    available = [
        make_player("WR A", "WR", 1, adp="", upside=3),
        make_player("WR B", "WR", 2, adp="2.01", upside=""),
        make_player("WR C", "WR", 3, adp=1.5, upside="9"),
    ]
    roster = [_slot("Late WR", "WR", rank=80), _slot("Early WR", "WR", rank=5), _slot("Mystery", "WR")]

    breakdown = positional_breakdown(roster, available, {"WR": 0, "QB": 1})
    wr = breakdown["WR"]

    assert list(breakdown) == ["RB", "WR", "QB", "TE", "D", "K"]
    assert [p.name for p in wr.by_rank] == ["WR A", "WR B", "WR C"]
    assert [p.name for p in wr.by_adp] == ["WR C", "WR B", "WR A"]
    assert [p.name for p in wr.by_upside] == ["WR C", "WR B", "WR A"]
    assert [s.name for s in wr.drafted] == ["Early WR", "Late WR", "Mystery"]
    assert wr.count == 3
    assert not wr.need
    assert breakdown["QB"].need


def test_stack_opportunities():
    roster = [_slot("Patrick Mahomes", "QB", team="KC"), _slot("Free Agent QB", "QB", team="FA")]
    available = [
        make_player("KC WR", "WR", 30, team="KC", adp="5.01"),
        make_player("KC TE", "TE", 20, team="KC", adp="3.02"),
        make_player("KC RB", "RB", 10, team="KC", adp="1.02"),
        make_player("BUF WR", "WR", 15, team="BUF", adp="2.01"),
    ]

    stacks = stack_opportunities(roster, available)

    assert len(stacks) == 1
    assert stacks[0].qb_team == "KC"
    assert [p.name for p in stacks[0].targets] == ["KC TE", "KC WR"]


def test_adp_round_parsing():
    assert adp_round("3.07") == 3
    assert adp_round(12.01) == 12
    assert adp_round("12") is None
    assert adp_round(None) is None


def test_build_roster_fills_gaps_from_catalog():
    catalog = [make_player("Christian McCaffrey", "RB", 1, team="SF", bye=9)]
    state = make_state(
        [make_record("christian mccaffrey", 1, 1), make_record("Nobody Known", 2, 1, position="WR")]
    )

    roster = build_roster(state.user_team, catalog)

    assert (roster[0].position, roster[0].team, roster[0].bye, roster[0].matched) == ("RB", "SF", 9, True)
    assert (roster[1].position, roster[1].matched, roster[1].rank) == ("WR", False, None)


def test_report_for_user_team():
    catalog = [
        make_player("Christian McCaffrey", "RB", 1, team="SF"),
        make_player("Tyreek Hill", "WR", 2, team="MIA"),
        make_player("Josh Allen", "QB", 3, team="BUF"),
        make_player("Justin Tucker", "K", 150),
    ]
    state = make_state(
        [make_record("Christian McCaffrey", 1, 1), make_record("Tyreek Hill", 2, 2)]
    )

    report = build_recommendation_report(state, catalog)

    assert report.user_team_id == 1
    assert report.current_pick == 3
    assert report.current_round == 2
    assert report.user_next_pick == 4
    assert report.position_counts["RB"] == 1
    assert report.position_needs["RB"] == 1
    assert [r.player.name for r in report.recommendations] == ["Josh Allen"]


def test_report_without_user_team_is_none():
    state = make_state([], user_team_id=None)
    assert build_recommendation_report(state, [make_player("A", "QB", 1)]) is None
