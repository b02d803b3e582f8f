from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from cms_taxonomy import config
from cms_taxonomy.errors import TaxonomyError
from cms_taxonomy.logger import get_logger
from cms_taxonomy.models.database import Base, engine, get_db
from cms_taxonomy.routers import color, project_type, tag, tag_type

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 初始化数据库表
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="CMS Taxonomy API",
    description="Project types, tag types and tags for the content-management dashboard",
    version="1.0.0",
    lifespan=lifespan,
)

# 配置CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册路由
app.include_router(project_type.router, prefix=config.API_PREFIX)  # 项目类型及其标签类型
app.include_router(tag_type.router, prefix=config.API_PREFIX)  # 全局标签类型
app.include_router(tag.router, prefix=config.API_PREFIX)  # 标签
app.include_router(color.router, prefix=config.API_PREFIX)  # 颜色工具


# 错误统一返回 {"error": "..."}
@app.exception_handler(TaxonomyError)
async def taxonomy_error_handler(request: Request, exc: TaxonomyError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.warning("Rejected request %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.get("/")
async def root():
    return {"message": "Welcome to CMS Taxonomy API"}


@app.get("/health")
def health(db: Session = Depends(get_db)):
    """检查数据库连接"""
    db.execute(text("SELECT 1"))
    return {"status": "ok"}


def run():
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
