"""Seed games from a CSV file with home_team,away_team,kickoff_at columns."""
import csv
import sys
from pathlib import Path
from datetime import datetime

sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlmodel import Session, select
from leaguehub.database import engine, create_db_and_tables
from leaguehub.models.game import Game


def load_games(csv_path: Path) -> list[Game]:
    games = []
    with open(csv_path, newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            games.append(Game(
                home_team=row["home_team"].strip(),
                away_team=row["away_team"].strip(),
                kickoff_at=datetime.fromisoformat(row["kickoff_at"].strip())
            ))
    return games


def seed_games(csv_path: Path, force: bool = False):
    create_db_and_tables()

    with Session(engine) as session:
        if force:
            session.query(Game).delete()
            session.commit()

        existing = session.exec(select(Game)).first()
        if existing:
            print("Games already seeded. Use --force to re-seed.")
            return

        games = load_games(csv_path)
        session.add_all(games)
        session.commit()
        print(f"Seeded {len(games)} games.")


if __name__ == "__main__":
    args = [arg for arg in sys.argv[1:] if not arg.startswith("--")]
    if not args:
        print("Usage: python scripts/seed_games.py <games.csv> [--force]")
        sys.exit(1)
    seed_games(Path(args[0]), force="--force" in sys.argv)
