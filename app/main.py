import argparse
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional
from xml.etree.ElementTree import Element, SubElement, tostring

from flask import Flask, jsonify, make_response, request
from werkzeug.middleware.proxy_fix import ProxyFix

from config_manager import ConfigManager
from catalog_service.assistant import ArticleAssistant
from catalog_service.catalog import CatalogError, CatalogProvider
from catalog_service.logging_config import setup_logging
from catalog_service.recommendations import RecommendationEngine, build_default_engine

from app.article_detail.factory import create_article_detail_module
from app.assistant.factory import create_assistant_module
from app.hub.factory import create_hub_module
from app.recommendations.factory import create_recommendations_module
from app.search.factory import create_search_module

PROJECT_ROOT = Path(__file__).parent.parent

_LOG = logging.getLogger(__name__)


def _resolve(path_str: str) -> Path:
    path = Path(path_str)
    return path if path.is_absolute() else PROJECT_ROOT / path


def create_app(
    config_manager: Optional[ConfigManager] = None,
    catalog: Optional[CatalogProvider] = None,
    assistant: Optional[ArticleAssistant] = None,
    recommendation_engine: Optional[RecommendationEngine] = None,
) -> Flask:
    """Build the Flask application and wire every subsystem.

    Collaborators can be injected for tests; otherwise they are built from
    configuration.
    """
    config_manager = config_manager or ConfigManager()
    catalog_config = config_manager.get_catalog_config()
    reco_config = config_manager.get_recommendation_config()

    catalog = catalog or CatalogProvider(_resolve(catalog_config.catalog_file))
    if assistant is None:
        assistant = ArticleAssistant.from_config(
            config_manager.get_llm_config(), _resolve(catalog_config.prompts_dir)
        )
    recommendation_engine = recommendation_engine or build_default_engine(reco_config)

    app = Flask(__name__)
    app.wsgi_app = ProxyFix(
        app.wsgi_app,
        x_proto=1,     # trust 1 hop for X-Forwarded-Proto
        x_host=1,      # trust 1 hop for X-Forwarded-Host
        x_prefix=1)    # <-- pay attention to X-Forwarded-Prefix

    hub_module = create_hub_module(catalog, recommendation_engine)
    recommendations_module = create_recommendations_module(catalog, recommendation_engine)
    article_detail_module = create_article_detail_module(catalog, assistant)
    search_module = create_search_module(catalog, assistant)
    assistant_module = create_assistant_module(assistant, catalog)

    app.register_blueprint(hub_module["blueprint"])
    app.register_blueprint(recommendations_module["blueprint"])
    app.register_blueprint(article_detail_module["blueprint"])
    app.register_blueprint(search_module["blueprint"])
    app.register_blueprint(assistant_module["blueprint"])

    app.extensions["catalog"] = catalog
    app.extensions["recommendation_engine"] = recommendation_engine

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(CatalogError)
    def catalog_unavailable(error: CatalogError):
        _LOG.error("Catalog unavailable: %s", error)
        return jsonify({"error": "Catalog unavailable", "message": str(error)}), 503

    # -------------------------------------------------------------------------
    # Routes
    # -------------------------------------------------------------------------

    @app.get("/api/articles")
    def list_articles():
        """Whole catalog as summaries, in catalog order."""
        articles = catalog.articles()
        return jsonify({
            "articles": [a.summary_dict() for a in articles],
            "total": len(articles),
        })

    @app.get("/sitemap.xml")
    def sitemap_xml():
        """Generate and serve XML sitemap for all articles."""
        urlset = Element('urlset')
        urlset.set('xmlns', 'http://www.sitemaps.org/schemas/sitemap/0.9')

        root_url = request.url_root.rstrip('/')
        url = SubElement(urlset, 'url')
        SubElement(url, 'loc').text = root_url
        SubElement(url, 'lastmod').text = datetime.now().strftime('%Y-%m-%d')
        SubElement(url, 'changefreq').text = 'weekly'
        SubElement(url, 'priority').text = '1.0'

        for article in catalog.articles():
            url = SubElement(urlset, 'url')
            SubElement(url, 'loc').text = f"{root_url}/article/{article.id}"
            if article.publish_date:
                SubElement(url, 'lastmod').text = article.publish_date.isoformat()
            SubElement(url, 'changefreq').text = 'monthly'
            SubElement(url, 'priority').text = '0.8'

        xml_string = tostring(urlset, encoding='utf-8', xml_declaration=True)
        response = make_response(xml_string)
        response.headers['Content-Type'] = 'application/xml; charset=utf-8'
        return response

    @app.get("/actuator/health")
    def actuator_health():
        """Health check endpoint for monitoring tools and cloud platforms."""
        return jsonify({
            "status": "UP",
            "service": "cyber-insights-hub"
        }), 200

    return app


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Flask application for the Cyber Insights hub")
    parser.add_argument("--port", type=int, help="Port to run the server on")
    parser.add_argument("--host", type=str, help="Host to bind the server to")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    args = parser.parse_args()

    manager = ConfigManager()
    app_config = manager.get_app_config()
    if args.port:
        app_config.port = args.port
    if args.host:
        app_config.host = args.host
    if args.debug:
        app_config.debug = args.debug

    setup_logging(debug=app_config.debug)
    llm_config = manager.get_llm_config()
    _LOG.info("LLM provider: %s (%s)", llm_config.provider, llm_config.model)
    _LOG.info("Serving on %s:%s", app_config.host, app_config.port)

    create_app(manager).run(
        host=app_config.host,
        port=app_config.port,
        debug=app_config.debug
    )
