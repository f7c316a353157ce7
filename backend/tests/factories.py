"""Builders for ball-by-ball test records."""

from typing import Dict, List, Optional

from match_analytics.schemas.record import Match


def create_test_delivery(
    batter: str = "A",
    bowler: str = "X",
    non_striker: Optional[str] = "B",
    runs: int = 0,
    extras: Optional[Dict[str, int]] = None,
    player_out: Optional[str] = None,
    kind: str = "bowled",
) -> dict:
    """Create a raw delivery; extras like {"wides": 1} add to the total."""
    extra_runs = sum(extras.values()) if extras else 0
    delivery = {
        "batter": batter,
        "bowler": bowler,
        "non_striker": non_striker,
        "runs": {"batter": runs, "extras": extra_runs, "total": runs + extra_runs},
    }
    if extras:
        delivery["extras"] = extras
    if player_out:
        delivery["wickets"] = [{"player_out": player_out, "kind": kind}]
    return delivery


def create_test_over(number: int, deliveries: List[dict]) -> dict:
    """Create a raw over; `number` is 0-based as in source data."""
    return {"over": number, "deliveries": deliveries}


def create_dot_over(number: int, bowler: str = "X", batter: str = "A", non_striker: str = "B") -> dict:
    """Create an over of six dot balls."""
    return create_test_over(
        number,
        [create_test_delivery(batter, bowler, non_striker) for _ in range(6)],
    )


def create_test_innings(team: str, overs: List[dict]) -> dict:
    return {"team": team, "overs": overs}


def create_test_match(
    innings: List[dict],
    info: Optional[dict] = None,
    match_id: Optional[str] = None,
) -> Match:
    """Create a parsed match record."""
    data = {"info": info or {"teams": [i["team"] for i in innings]}, "innings": innings}
    if match_id:
        data["match_id"] = match_id
    return Match.model_validate(data)


def create_sample_record() -> dict:
    """
    Two short innings exercising boundaries, a wicket, a wide and a
    maiden-wicket over.

    Lions 21/1 (2 overs, 13 deliveries); Tigers 0/1 (1 over).
    """
    lions = create_test_innings("Lions", [
        create_test_over(0, [
            create_test_delivery("A", "Bolt", "B", runs=4),
            create_test_delivery("A", "Bolt", "B", runs=1),
            create_test_delivery("B", "Bolt", "A"),
            create_test_delivery("B", "Bolt", "A", runs=6),
            create_test_delivery("B", "Bolt", "A", player_out="B", kind="caught"),
            create_test_delivery("C", "Bolt", "A", runs=1),
        ]),
        create_test_over(1, [
            create_test_delivery("C", "Starc", "A", extras={"wides": 1}),
            create_test_delivery("C", "Starc", "A", runs=2),
            create_test_delivery("C", "Starc", "A", runs=4),
            create_test_delivery("C", "Starc", "A", runs=1),
            create_test_delivery("A", "Starc", "C"),
            create_test_delivery("A", "Starc", "C"),
            create_test_delivery("A", "Starc", "C", runs=1),
        ]),
    ])
    tigers = create_test_innings("Tigers", [
        create_test_over(0, [
            create_test_delivery("D", "Ashwin", "E", player_out="D", kind="lbw"),
        ] + [create_test_delivery("F", "Ashwin", "E") for _ in range(5)]),
    ])
    return {
        "meta": {"data_version": "1.1.0", "created": "2024-03-11", "revision": 1},
        "info": {
            "teams": ["Lions", "Tigers"],
            "venue": "Eden Park",
            "city": "Auckland",
            "dates": ["2024-03-10"],
            "match_type": "T20",
            "season": 2024,
            "event": {"name": "Test Series", "match_number": 1},
            "outcome": {"winner": "Lions", "by": {"runs": 21}},
            "toss": {"winner": "Lions", "decision": "bat"},
            "player_of_match": ["C"],
        },
        "innings": [lions, tigers],
    }
