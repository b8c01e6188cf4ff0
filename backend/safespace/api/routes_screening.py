from fastapi import APIRouter

from safespace.api.converters import scoring_out, to_responses, triage_out
from safespace.schemas.screening import ScoreRequest, ScoringResultOut, TriagePreviewRequest, TriageResultOut
from safespace.services.result import aggregate
from safespace.services.scoring import score_gad7, score_phq9
from safespace.services.triage import extract_keywords, map_to_problem

router = APIRouter(prefix="/screenings", tags=["screening"])


@router.post("/phq9", response_model=ScoringResultOut)
async def score_phq9_responses(payload: ScoreRequest) -> ScoringResultOut:
    # Request Example:
    # POST /screenings/phq9
    # {"responses":[{"question_id":"phq9_0","answer":2},{"question_id":"phq9_1","answer":"3"}]}
    #
    # Response Example:
    # 200
    # {"score":5,"severity":"mild"}
    return scoring_out(score_phq9(to_responses(payload.responses)))


@router.post("/gad7", response_model=ScoringResultOut)
async def score_gad7_responses(payload: ScoreRequest) -> ScoringResultOut:
    return scoring_out(score_gad7(to_responses(payload.responses)))


@router.post("/triage", response_model=TriageResultOut)
async def preview_triage(payload: TriagePreviewRequest) -> TriageResultOut:
    # Request Example:
    # POST /screenings/triage
    # {"phq9":[...],"gad7":[{"question_id":"gad7_0","answer":3},...],"keywords":["career"],"auxiliary":{}}
    #
    # Response Example:
    # 200
    # {"phq9":{...},"gad7":{"score":12,"severity":"moderate"},"problem_id":"placement_career_anxiety","priority":"medium",...}
    phq9 = score_phq9(to_responses(payload.phq9))
    gad7 = score_gad7(to_responses(payload.gad7))
    keywords = [k.lower() for k in payload.keywords] + extract_keywords(payload.concerns)
    problem_id = map_to_problem(phq9.score, gad7.score, keywords, payload.auxiliary)
    return triage_out(aggregate(phq9, gad7, problem_id))
