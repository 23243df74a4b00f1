import logging
from typing import Any

from flask import Flask, Response, abort, jsonify, render_template, request, send_from_directory

from dataset_catalog.browse import browse
from dataset_catalog.catalog import CatalogError, build_catalog
from dataset_catalog.config import AppConfig, load_config

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(config: AppConfig | None = None) -> Flask:
    app = Flask(__name__, static_folder=None)
    config = config or load_config()
    app.config["CATALOG"] = config

    @app.get("/api/datasets")
    @app.get("/api/datasets/<path:_rest>")
    def datasets(_rest: str | None = None) -> tuple[Response, int]:
        try:
            payload = build_catalog(config)
        except CatalogError:
            logger.exception("Catalog build failed")
            return jsonify({"error": "Failed to load dataset descriptions."}), 500
        return jsonify(payload), 200

    @app.get("/api/browse")
    def browse_storage() -> Any:
        listing = browse(config.storage_root, request.args.get("path"))
        if listing is None:
            return Response("Not found", status=404, mimetype="text/plain")
        return render_template("browse.html", listing=listing)

    @app.get("/")
    def index() -> Response:
        return send_from_directory(config.public_dir, "index.html")

    @app.get("/<path:asset>")
    def static_asset(asset: str) -> Response:
        if asset.startswith("api/"):
            abort(404)
        return send_from_directory(config.public_dir, asset)

    return app


def run() -> None:
    config = load_config()
    configure_logging(config.log_level)
    app = create_app(config)
    logger.info("Dashboard server listening on http://%s:%d", config.host, config.port)
    app.run(host=config.host, port=config.port)


if __name__ == "__main__":
    run()
