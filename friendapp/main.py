import os
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from .routes import router
from .core import init_metrics, db_startup, shutdown_connections
import logging
from pythonjsonlogger import jsonlogger

# setup structured logging
logger = logging.getLogger('friendapp')
handler = logging.StreamHandler()
formatter = jsonlogger.JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s')
handler.setFormatter(formatter)
logger.addHandler(handler)
logger.setLevel(os.getenv('LOG_LEVEL', 'INFO').upper())

ENABLE_METRICS = os.getenv('ENABLE_METRICS', '1') not in ('0', 'false', 'False')
CREATE_TABLES_ON_STARTUP = os.getenv('CREATE_TABLES_ON_STARTUP', '0') in ('1', 'true', 'True')

app = FastAPI(title="Friendship API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=['*'],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.include_router(router, prefix="/api")

@app.get('/healthz')
async def healthz():
    return {'status': 'ok'}

@app.middleware('http')
async def log_requests(request: Request, call_next):
    logger.info({'msg':'request_start','method':request.method,'path':request.url.path})
    response = await call_next(request)
    logger.info({'msg':'request_end','status': response.status_code})
    return response

@app.on_event("startup")
async def startup():
    # Best-effort init, don't block app from starting if a dependency fails
    if ENABLE_METRICS:
        try:
            init_metrics()
        except Exception as e:
            logger.warning({'msg': 'metrics_init_failed', 'error': str(e)})
    if CREATE_TABLES_ON_STARTUP:
        try:
            await db_startup()
        except Exception as e:
            logger.warning({'msg': 'db_init_failed', 'error': str(e)})

@app.on_event("shutdown")
async def shutdown():
    await shutdown_connections()
