"""
Print a social round robin schedule for eight players.

Usage:
    python src/generate_schedule.py players.yaml
    python src/generate_schedule.py Ann Bob Cid Dee Eve Fay Gus Hal --seed 7
"""
import argparse
import os
import random
import sys

import yaml

from core.errors import InvalidPlayerCount
from core.session import make_players
from core.round_robin import generate_round_robin


def load_player_names(file_path):
    """Load player names from a YAML list (or a mapping with a 'players' list)."""
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file)
    if isinstance(data, dict):
        data = data.get('players')
    if not isinstance(data, list):
        return []
    return [str(name) for name in data]


def format_schedule(players, rounds):
    names = {p.id: p.name for p in players}
    lines = []
    for number, rnd in enumerate(rounds, start=1):
        if lines:
            lines.append('')
        lines.append(f"# Round {number}")
        for match in rnd.matches:
            team1 = ' & '.join(names[p] for p in match.team1)
            team2 = ' & '.join(names[p] for p in match.team2)
            lines.append(f"{team1} vs {team2}")
    return '\n'.join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Generate a social doubles round robin for 8 players.')
    parser.add_argument('players', nargs='+', help='A YAML file of names, or the eight names')
    parser.add_argument('--seed', type=int, default=None, help='Seed for a reproducible shuffle')
    args = parser.parse_args(argv)

    if len(args.players) == 1 and os.path.isfile(args.players[0]):
        names = load_player_names(args.players[0])
    else:
        names = args.players

    try:
        players = make_players(names)
    except InvalidPlayerCount as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    rng = random.Random(args.seed) if args.seed is not None else None
    rounds = generate_round_robin([p.id for p in players], rng)
    print(format_schedule(players, rounds))
    return 0


if __name__ == '__main__':
    sys.exit(main())
