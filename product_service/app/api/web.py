"""Server-rendered pages: catalog home and the GraphQL console."""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..core.setting import get_settings
from ..services.category_service import CategoryService
from ..services.product_service import ProductService
from ..utils.jwt_handler import TokenData
from .dependencies import CategoryServiceDep, PrincipalDep, ProductServiceDep, is_admin

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    product_service: ProductService = ProductServiceDep,
    category_service: CategoryService = CategoryServiceDep,
    principal: Optional[TokenData] = PrincipalDep,
):
    """Catalog overview with all products and categories"""
    products = await product_service.find_all_products()
    categories = await category_service.find_all_categories()
    return templates.TemplateResponse(
        request,
        "home.html",
        {
            "products": products,
            "categories": categories,
            "is_admin": is_admin(principal),
        },
    )


@router.get("/graphql-console", response_class=HTMLResponse)
async def graphql_console(
    request: Request, principal: Optional[TokenData] = PrincipalDep
):
    """Interactive console posting queries to the GraphQL endpoint"""
    return templates.TemplateResponse(
        request,
        "graphql_console.html",
        {
            "is_admin": is_admin(principal),
            "graphql_path": get_settings().GRAPHQL_PATH,
        },
    )
