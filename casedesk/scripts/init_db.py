import asyncio
from casedesk.database import engine, Base

# Import all models to ensure they are registered in Base.metadata
from casedesk.cases.models import Case  # noqa: F401
from casedesk.documents.models import Document  # noqa: F401

async def init_models(reset: bool = False):
    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    print("Database tables created.")

if __name__ == "__main__":
    asyncio.run(init_models())
