"""REST API for the flagroster roster tracker."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import BackgroundTasks, FastAPI, File, HTTPException, Query, Response, UploadFile

from flagroster.api.schemas import (
    CommentaryStatusResponse,
    DashboardResponse,
    PlayerCreateRequest,
    PlayerProfileResponse,
    PlayerProfileUpdate,
    RadarAxisResponse,
    RankingColumnResponse,
    RankingResponse,
    RankingRowResponse,
    RoleProfileResponse,
    StatTileResponse,
    StatUpdateRequest,
    TrainingSessionRequest,
)
from flagroster.commentary import CommentaryService
from flagroster.config import AgeGroup, ROLE_LABELS, ROLE_ORDER, Role, classify, iter_fields, parse_role
from flagroster.config_loader import Settings, load_settings
from flagroster.metrics import RADAR_AXES, highlight_tiles, radar_profile
from flagroster.models import Player, RoleLimitError, TrainingFile, TrainingSession
from flagroster.persistence import BlobStore, RosterStore, TrainingStore
from flagroster.ranking import Leaderboard, SortDirection, SortState, build_leaderboard, default_sort
from flagroster.roster import RosterService, TrainingLog
from flagroster.seed import SeedProvider, default_seed_players


logger = logging.getLogger(__name__)


def _role_or_400(value: str) -> Role:
    try:
        return parse_role(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _role_profile(role: Role, player: Player) -> RoleProfileResponse:
    line = player.stats[role]
    return RoleProfileResponse(
        role=role,
        category=classify(role),
        stats={field.key: value for field, value in zip(line.stat_fields(), line.values())},
        tiles=[StatTileResponse(label=t.label, value=t.value, sub_label=t.sub_label) for t in highlight_tiles(line)],
        radar=[RadarAxisResponse(label=a.label, value=a.value, full_mark=a.full_mark) for a in radar_profile(line)],
    )


def leaderboard_to_response(board: Leaderboard) -> RankingResponse:
    return RankingResponse(
        role=board.role,
        category=classify(board.role),
        sort_key=board.sort.key,
        direction=board.sort.direction,
        columns=[RankingColumnResponse(key=c.key, label=c.label) for c in board.columns],
        rows=[
            RankingRowResponse(
                rank=position,
                player_id=entry.player.player_id,
                name=entry.player.name,
                number=entry.player.number,
                age_group=entry.player.age_group,
                values={field.key: value for field, value in zip(entry.stats.stat_fields(), entry.stats.values())},
            )
            for position, entry in enumerate(board.entries, start=1)
        ],
    )


def create_app(
    settings: Optional[Settings] = None,
    *,
    seed: SeedProvider = default_seed_players,
    commentary: Optional[CommentaryService] = None,
) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="flagroster")
    blobs = BlobStore(settings.db_path)
    roster = RosterService.bootstrap(RosterStore(blobs), seed=seed)
    training = TrainingLog.bootstrap(TrainingStore(blobs))
    commentary = commentary or CommentaryService(settings)
    pending: set[str] = set()

    app.state.settings = settings
    app.state.roster = roster
    app.state.training = training
    app.state.commentary = commentary
    app.state.commentary_pending = pending

    def _fetch_player_or_404(player_id: str) -> Player:
        try:
            return roster.get(player_id)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail="Player not found") from exc

    def _fetch_session_or_404(session_id: str) -> TrainingSession:
        try:
            return training.get(session_id)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail="Training session not found") from exc

    def _mutate(player_id: str, action) -> Player:
        _fetch_player_or_404(player_id)
        try:
            return action()
        except RoleLimitError as exc:
            raise HTTPException(status_code=409, detail=exc.notice) from exc
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc.args[0]) if exc.args else "Not found") from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/meta/roles")
    async def list_roles() -> list[dict[str, str]]:
        return [
            {"role": role.value, "label": ROLE_LABELS[role], "category": classify(role).value}
            for role in ROLE_ORDER
        ]

    @app.get("/meta/stat-fields")
    async def list_stat_fields() -> dict[str, list[dict[str, str]]]:
        return {
            category.value: [{"key": field.key, "label": field.label} for field in fields]
            for category, fields in iter_fields()
        }

    @app.get("/meta/radar-axes")
    async def list_radar_axes() -> dict[str, list[str]]:
        return {category.value: list(labels) for category, labels in RADAR_AXES.items()}

    @app.get("/dashboard", response_model=DashboardResponse)
    async def dashboard() -> DashboardResponse:
        return DashboardResponse(players=len(roster.players), training_sessions=len(training.sessions))

    @app.get("/players", response_model=list[Player])
    async def list_players(age_group: Optional[str] = Query(None)) -> list[Player]:
        if age_group is None or age_group.strip().lower() in ("", "all"):
            return roster.list_players()
        try:
            group = AgeGroup(age_group.strip().upper())
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Unknown age group {age_group!r}") from exc
        return roster.list_players(group)

    @app.post("/players", response_model=Player, status_code=201)
    async def create_player(payload: PlayerCreateRequest) -> Player:
        try:
            return roster.create(
                name=payload.name,
                number=payload.number,
                age_group=payload.age_group,
                avatar=payload.avatar,
                roles=payload.roles or (),
            )
        except RoleLimitError as exc:
            raise HTTPException(status_code=409, detail=exc.notice) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.get("/players/{player_id}", response_model=Player)
    async def get_player(player_id: str) -> Player:
        return _fetch_player_or_404(player_id)

    @app.put("/players/{player_id}", response_model=Player)
    async def update_player(player_id: str, payload: PlayerProfileUpdate) -> Player:
        profile = payload.model_dump(exclude_none=True)
        return _mutate(player_id, lambda: roster.update_profile(player_id, **profile))

    @app.delete("/players/{player_id}", status_code=204)
    async def delete_player(player_id: str) -> Response:
        _fetch_player_or_404(player_id)
        roster.delete(player_id)
        return Response(status_code=204)

    @app.post("/players/{player_id}/roles/{role}", response_model=Player)
    async def add_role(player_id: str, role: str) -> Player:
        resolved = _role_or_400(role)
        return _mutate(player_id, lambda: roster.add_role(player_id, resolved))

    @app.delete("/players/{player_id}/roles/{role}", response_model=Player)
    async def remove_role(player_id: str, role: str) -> Player:
        resolved = _role_or_400(role)
        return _mutate(player_id, lambda: roster.remove_role(player_id, resolved))

    @app.patch("/players/{player_id}/stats/{role}", response_model=Player)
    async def update_stats(player_id: str, role: str, payload: StatUpdateRequest) -> Player:
        resolved = _role_or_400(role)
        return _mutate(player_id, lambda: roster.set_stats(player_id, resolved, payload.values))

    @app.get("/players/{player_id}/profile", response_model=PlayerProfileResponse)
    async def player_profile(player_id: str) -> PlayerProfileResponse:
        player = _fetch_player_or_404(player_id)
        return PlayerProfileResponse(
            player=player,
            roles=[_role_profile(role, player) for role in player.roles if role in player.stats],
        )

    async def _run_commentary(snapshot: Player) -> None:
        try:
            update = await commentary.commentary_for(snapshot)
            roster.apply_commentary(update)
        finally:
            pending.discard(snapshot.player_id)

    @app.post("/players/{player_id}/commentary", response_model=CommentaryStatusResponse, status_code=202)
    async def request_commentary(player_id: str, background_tasks: BackgroundTasks) -> CommentaryStatusResponse:
        player = _fetch_player_or_404(player_id)
        if player_id in pending:
            logger.info("Commentary for %s already in flight", player_id)
            raise HTTPException(status_code=409, detail="Commentary is already being generated")
        pending.add(player_id)
        background_tasks.add_task(_run_commentary, player)
        return CommentaryStatusResponse(player_id=player_id, status="queued", commentary=player.commentary)

    @app.get("/players/{player_id}/commentary", response_model=CommentaryStatusResponse)
    async def get_commentary(player_id: str) -> CommentaryStatusResponse:
        player = _fetch_player_or_404(player_id)
        status = "pending" if player_id in pending else ("ready" if player.commentary else "empty")
        return CommentaryStatusResponse(player_id=player_id, status=status, commentary=player.commentary)

    @app.get("/rankings/{role}", response_model=RankingResponse)
    async def rankings(
        role: str,
        sort_key: Optional[str] = Query(None),
        direction: SortDirection = Query("desc"),
        click: Optional[str] = Query(None, description="Column clicked while the given sort is active"),
    ) -> RankingResponse:
        resolved = _role_or_400(role)
        sort = SortState(key=sort_key, direction=direction) if sort_key else default_sort(resolved)
        if click:
            sort = sort.toggle(click)
        board = build_leaderboard(roster.players, resolved, sort)
        return leaderboard_to_response(board)

    @app.get("/training", response_model=list[TrainingSession])
    async def list_training() -> list[TrainingSession]:
        return list(training.sessions)

    @app.post("/training", response_model=TrainingSession, status_code=201)
    async def create_training(payload: TrainingSessionRequest) -> TrainingSession:
        try:
            return training.create(payload.title, payload.description)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.delete("/training/{session_id}", status_code=204)
    async def delete_training(session_id: str) -> Response:
        _fetch_session_or_404(session_id)
        training.delete(session_id)
        return Response(status_code=204)

    @app.post("/training/{session_id}/files", response_model=TrainingFile, status_code=201)
    async def attach_training_file(session_id: str, upload: UploadFile = File(...)) -> TrainingFile:
        _fetch_session_or_404(session_id)
        contents = await upload.read()
        if not contents:
            raise HTTPException(status_code=400, detail="Uploaded file is empty")
        return training.attach(
            session_id,
            filename=upload.filename or "upload",
            content=contents,
            content_type=upload.content_type,
        )

    @app.delete("/training/{session_id}/files/{file_id}", response_model=TrainingSession)
    async def remove_training_file(session_id: str, file_id: str) -> TrainingSession:
        _fetch_session_or_404(session_id)
        try:
            return training.remove_file(session_id, file_id)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail="File not found") from exc

    return app


__all__ = ["create_app", "leaderboard_to_response"]
