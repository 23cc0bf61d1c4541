import os
import asyncio
import logging
from prometheus_client import Counter, start_http_server

logger = logging.getLogger(__name__)

METRICS_PORT = int(os.getenv('METRICS_PORT', '8001'))

FRIENDSHIP_MUTATIONS = Counter(
    'friendship_mutations_total',
    'Friendship request mutations handled',
    ['action', 'outcome'],
)

def init_metrics(port: int = METRICS_PORT):
    """Initialize Prometheus metrics server"""
    try:
        start_http_server(port)
        logger.info(f"Prometheus metrics server started on port {port}")
    except Exception as e:
        logger.warning(f'Prometheus start failed: {e}')

async def db_startup():
    """Create tables when no migration step runs ahead of the app"""
    from .models import engine, Base

    max_retries = 3
    retry_delay = 3  # seconds

    for attempt in range(max_retries):
        try:
            logger.info(f"Creating database tables (attempt {attempt + 1}/{max_retries})")
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables ready")
            return
        except Exception as e:
            logger.warning(f'Database startup attempt {attempt + 1} failed: {e}')
            if attempt < max_retries - 1:
                logger.info(f"Retrying database setup in {retry_delay} seconds...")
                await asyncio.sleep(retry_delay)
            else:
                logger.error("Failed to create database tables after all retries")

async def shutdown_connections():
    """Dispose the database engine pool"""
    from .models import engine

    logger.info("Shutting down connections...")
    try:
        await engine.dispose()
        logger.info("Database engine disposed")
    except Exception as e:
        logger.error(f"Error disposing database engine: {e}")
