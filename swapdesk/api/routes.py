from fastapi import APIRouter, HTTPException, Request

from swapdesk.errors import FeedNotReadyError, SubmissionInProgressError, SwapRejectedError, UnknownTokenError
from swapdesk.schemas.swap import AmountUpdate, PickerOpen, SearchUpdate, SlippageUpdate, TokenPick
from swapdesk.services.balance_simulator import balance_for, balances_for

router = APIRouter()


def _session(request: Request):
    return request.app.state.session


def _feed_summary(state) -> dict:
    return {
        'status': state.status,
        'error': state.error,
        'token_count': len(state.tokens),
        'loaded_at': state.loaded_at,
    }


@router.get('/feed')
def get_feed(request: Request):
    return _feed_summary(request.app.state.feed_loader.state())


@router.post('/feed/reload')
def reload_feed(request: Request):
    return _feed_summary(request.app.state.feed_loader.load())


@router.get('/tokens')
def list_tokens(request: Request):
    state = request.app.state.feed_loader.state()
    if state.status != 'READY':
        raise HTTPException(status_code=503, detail=state.error or 'FEED_NOT_READY')
    tokens = _session(request).filtered_tokens()
    balances = balances_for(tokens)
    return [
        {
            'symbol': t.symbol,
            'price': t.price,
            'icon_ref': t.icon_ref,
            'fallback_glyph': t.fallback_glyph,
            'balance': balances[t.symbol],
        }
        for t in tokens
    ]


@router.get('/balances/{symbol}')
def get_balance(symbol: str):
    normalized = symbol.strip().upper()
    if not normalized:
        raise HTTPException(status_code=400, detail='SYMBOL_REQUIRED')
    return {'symbol': normalized, 'balance': balance_for(normalized)}


@router.get('/session')
def get_session(request: Request):
    return _session(request).state()


@router.post('/session/tokens')
def pick_token(req: TokenPick, request: Request):
    session = _session(request)
    try:
        session.pick_token(req.side, req.symbol)
    except FeedNotReadyError as exc:
        raise HTTPException(status_code=503, detail='FEED_NOT_READY') from exc
    except UnknownTokenError as exc:
        raise HTTPException(status_code=404, detail='UNKNOWN_TOKEN') from exc
    return session.state()


@router.post('/session/swap-sides')
def swap_sides(request: Request):
    session = _session(request)
    session.swap_sides()
    return session.state()


@router.post('/session/picker')
def open_picker(req: PickerOpen, request: Request):
    session = _session(request)
    session.open_picker(req.side)
    return session.state()


@router.post('/session/amount')
def set_amount(req: AmountUpdate, request: Request):
    session = _session(request)
    session.set_amount_text(req.text)
    return session.state()


@router.post('/session/max')
def set_max_amount(request: Request):
    session = _session(request)
    session.set_max()
    return session.state()


@router.post('/session/search')
def set_search(req: SearchUpdate, request: Request):
    session = _session(request)
    session.set_search(req.query)
    return session.state()


@router.post('/session/slippage')
def set_slippage(req: SlippageUpdate, request: Request):
    session = _session(request)
    session.set_slippage(req.bps)
    return session.state()


@router.get('/session/quote')
def get_session_quote(request: Request):
    return _session(request).describe_quote()


@router.post('/session/submit')
def submit_swap(request: Request):
    session = _session(request)
    try:
        receipt = session.submit()
    except SubmissionInProgressError as exc:
        raise HTTPException(status_code=409, detail='SWAP_IN_PROGRESS') from exc
    except SwapRejectedError as exc:
        raise HTTPException(status_code=400, detail=exc.reason) from exc
    return receipt.model_dump()
