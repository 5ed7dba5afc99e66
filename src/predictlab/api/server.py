"""FastAPI backend for PredictLab.

Routes that mutate the session are ``async`` so each mutation runs on the
event-loop thread, one request at a time, with its propagation step. Model
and statistics routes only read state and run in the threadpool.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware

from predictlab import __version__
from predictlab.api.schemas import (
    AdaptPredictionRequest,
    GeneratePredictionRequest,
    LeagueStatisticsResponse,
    MatchSchema,
    PredictionSchema,
    RefreshResponse,
    SavePredictionResponse,
    SaveValueBetResponse,
    UpdateValueBetResponse,
    ValueBetSchema,
)
from predictlab.config import get_api_access_key, get_settings
from predictlab.predictions.session import PredictionSession


def get_prediction_session(request: Request) -> PredictionSession:
    return request.app.state.session


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    expected = get_api_access_key()
    if not x_api_key or x_api_key != expected:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


SessionDep = Annotated[PredictionSession, Depends(get_prediction_session)]
APIKeyDep = Annotated[None, Depends(require_api_key)]


def create_app(session: PredictionSession | None = None) -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="PredictLab API",
        version=__version__,
        description="Match predictions and value-bet tracking for one dashboard session.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.session = session or PredictionSession()
    _register_routes(app)
    return app


def _register_routes(app: FastAPI) -> None:
    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/version")
    async def version() -> dict[str, Any]:
        return {"name": "predictlab-football", "version": __version__}

    @app.post("/matches", response_model=RefreshResponse)
    async def refresh_matches(
        payload: list[MatchSchema],
        _: APIKeyDep,
        session: SessionDep,
    ) -> RefreshResponse:
        count = session.refresh(match.to_domain() for match in payload)
        return RefreshResponse(matches=count)

    @app.get("/league/statistics", response_model=LeagueStatisticsResponse)
    def league_statistics(session: SessionDep) -> LeagueStatisticsResponse:
        return LeagueStatisticsResponse.model_validate(session.league_statistics())

    @app.get("/predictions", response_model=list[PredictionSchema])
    async def list_predictions(session: SessionDep) -> list[PredictionSchema]:
        return [PredictionSchema.model_validate(p) for p in session.predictions()]

    @app.post("/predictions", response_model=SavePredictionResponse)
    async def save_prediction(
        payload: PredictionSchema,
        _: APIKeyDep,
        session: SessionDep,
    ) -> SavePredictionResponse:
        prediction = payload.to_domain()
        created = session.save(prediction)
        return SavePredictionResponse(
            created=created,
            prediction=PredictionSchema.model_validate(prediction),
        )

    @app.post("/predictions/generate", response_model=PredictionSchema)
    def generate_prediction(
        payload: GeneratePredictionRequest,
        session: SessionDep,
    ) -> PredictionSchema:
        prediction = session.generate_prediction(payload.home_team, payload.away_team)
        if prediction is None:
            raise HTTPException(
                status_code=422,
                detail="Both home_team and away_team are required.",
            )
        return PredictionSchema.model_validate(prediction)

    @app.post("/predictions/adapt", response_model=PredictionSchema)
    async def adapt_prediction(
        payload: AdaptPredictionRequest,
        session: SessionDep,
    ) -> PredictionSchema:
        prediction = session.adapt(
            payload.home_team,
            payload.away_team,
            payload.model_output.to_domain(),
        )
        if prediction is None:
            raise HTTPException(
                status_code=422,
                detail="Both home_team and away_team are required.",
            )
        return PredictionSchema.model_validate(prediction)

    @app.get("/predictions/active", response_model=PredictionSchema | None)
    async def active_prediction(session: SessionDep) -> PredictionSchema | None:
        prediction = session.active_prediction()
        return PredictionSchema.model_validate(prediction) if prediction else None

    @app.get("/predictions/active/bets", response_model=list[ValueBetSchema])
    async def active_bets(session: SessionDep) -> list[ValueBetSchema]:
        return [ValueBetSchema.model_validate(bet) for bet in session.active_bets()]

    @app.get("/value-bets", response_model=list[ValueBetSchema])
    async def list_value_bets(
        session: SessionDep,
        match_id: str | None = None,
    ) -> list[ValueBetSchema]:
        return [ValueBetSchema.model_validate(bet) for bet in session.value_bets(match_id)]

    @app.post("/value-bets", response_model=SaveValueBetResponse)
    async def save_value_bet(
        payload: ValueBetSchema,
        _: APIKeyDep,
        session: SessionDep,
    ) -> SaveValueBetResponse:
        attached = session.save_value_bet(payload.to_domain())
        return SaveValueBetResponse(bet=payload, attached_to=attached)

    @app.put("/value-bets", response_model=UpdateValueBetResponse)
    async def update_value_bet(
        payload: ValueBetSchema,
        _: APIKeyDep,
        session: SessionDep,
    ) -> UpdateValueBetResponse:
        updated = session.update_value_bet(payload.to_domain())
        return UpdateValueBetResponse(bet=payload, updated=updated)


app = create_app()
