"""
ScoreService - Recalcula las puntuaciones semanales y los totales de temporada.

Sistema de puntos:
- 1 punto por cada partido de la semana cuyo ganador coincide con el pick
- Partidos sin ganador registrado no dan puntos

Los totales de temporada se recalculan siempre sumando todas las semanas
del usuario, nunca se incrementan.
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from pickem.core.locks import ScopeLocks, season_locks
from pickem.models.game import Game
from pickem.models.pick import Pick
from pickem.models.score import RecomputeSummary
from pickem.repositories.game_repository import GameRepository
from pickem.repositories.score_repository import ScoreRepository, SeasonTotalRepository
from pickem.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


def tally_week_score(picks: list[Pick], games: list[Game]) -> tuple[int, int]:
    """
    Cuenta los aciertos de un usuario en una semana.

    Returns: (aciertos, picks que no corresponden a ningún partido de la semana)
    """
    picks_by_game = {p.game_id: p.pick for p in picks}

    week_score = 0
    for game in games:
        # Un ganador vacío nunca coincide, ni siquiera con un pick vacío
        if not game.has_winner:
            continue
        if picks_by_game.get(game.id) == game.winner:
            week_score += 1

    game_ids = {g.id for g in games}
    unmatched = sum(1 for game_id in picks_by_game if game_id not in game_ids)

    return week_score, unmatched


class ScoreService:
    def __init__(self, db: AsyncIOMotorDatabase, locks: Optional[ScopeLocks] = None):
        self.user_repo = UserRepository(db)
        self.game_repo = GameRepository(db)
        self.score_repo = ScoreRepository(db)
        self.season_total_repo = SeasonTotalRepository(db)
        self.locks = locks if locks is not None else season_locks

    async def recompute_scores(self, week: int, season: int) -> RecomputeSummary:
        """
        Recalcula Score y SeasonTotal de todos los usuarios para una semana.

        Para cada usuario (haya hecho picks o no):
        1. Cuenta aciertos contra los partidos de (week, season)
        2. Upsert del Score de esa semana, aunque sea 0
        3. Suma todos sus Score de la temporada
        4. Upsert del SeasonTotal con esa suma

        Toda la ejecución se hace con el lock de la temporada, así dos
        recálculos solapados de la misma temporada no se pisan.

        Los errores de la base de datos no se capturan: el primero corta
        el bucle y se propaga tal cual.
        """
        async with self.locks.for_scope(season):
            users = await self.user_repo.get_all()
            games = await self.game_repo.get_by_period(week, season)

            summary = RecomputeSummary(
                week=week,
                season=season,
                games_in_scope=len(games),
                games_with_winner=sum(1 for g in games if g.has_winner)
            )

            for user in users:
                week_score, unmatched = tally_week_score(user.picks, games)

                await self.score_repo.upsert(user.id, week, season, week_score)
                season_total = await self._sum_season(user.id, season)
                await self.season_total_repo.upsert(user.id, season, season_total)

                summary.users_processed += 1
                summary.unmatched_picks += unmatched

        if summary.unmatched_picks:
            logger.info(
                f"{summary.unmatched_picks} picks outside week {week}/{season} were ignored"
            )
        logger.info(
            f"Scores recomputed for week {week}/{season}: "
            f"{summary.users_processed} users, "
            f"{summary.games_with_winner}/{summary.games_in_scope} games decided"
        )

        return summary

    async def _sum_season(self, user_id: str, season: int) -> int:
        scores = await self.score_repo.get_user_season_scores(user_id, season)
        return sum(s.score for s in scores)
