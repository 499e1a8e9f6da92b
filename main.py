# main.py
import logging
import sys

import psycopg2
from flask import Flask, request, jsonify

import config
import messages
import table_service
from db.postgres_client import connection, check_connection
from models import TableRef
from result_mapper import build_envelope

logger = logging.getLogger(__name__)

app = Flask(__name__)
# pretty-printed bodies, keys in the order they were built
app.json.compact = False
app.json.sort_keys = False


def setup_logging(level=None):
    logging.basicConfig(
        level=level or config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _respond(work):
    """Run `work(conn)` on a pooled connection and render the envelope it returns."""
    try:
        with connection() as conn:
            envelope = work(conn)
    except psycopg2.Error as e:
        logger.error("%s%s", messages.DB_CONNECTION_ERROR, e)
        envelope = build_envelope({"error": messages.DB_CONNECTION_ERROR})
    try:
        return jsonify(envelope.body), envelope.status
    except (TypeError, ValueError) as e:
        logger.error("%s%s", messages.QUERY_EXECUTION_ERROR, e)
        return jsonify({"error": messages.QUERY_EXECUTION_ERROR}), messages.FAILED


def _body():
    return request.get_data(as_text=True)


@app.route("/")
def live_check():
    return jsonify({"live-check": messages.LIVE_CHECK})


@app.route("/tables")
@app.route("/tables/")
@app.route("/tables/<schema>")
def get_tables(schema=""):
    logger.debug("listing tables for schema %r", schema)
    return _respond(lambda conn: table_service.list_tables(conn, schema))


@app.route("/tables/<schema>/<name>")
def get_table_details(schema, name):
    return _respond(lambda conn: table_service.table_details(conn, TableRef(schema, name)))


@app.route("/tables/<schema>/<name>/structure")
def get_table_structure(schema, name):
    return _respond(lambda conn: table_service.table_structure(conn, TableRef(schema, name)))


@app.route("/select/<schema>/<name>", methods=["POST"])
def select_data(schema, name):
    body = _body()
    logger.debug("select request body: %s", body)
    return _respond(lambda conn: table_service.select(conn, TableRef(schema, name), body))


@app.route("/insert/<schema>/<name>", methods=["POST"])
def insert_data(schema, name):
    body = _body()
    logger.debug("insert request body: %s", body)
    return _respond(lambda conn: table_service.insert(conn, TableRef(schema, name), body))


@app.route("/delete/<schema>/<name>", methods=["POST"])
def delete_data(schema, name):
    body = _body()
    logger.debug("delete request body: %s", body)
    return _respond(lambda conn: table_service.delete(conn, TableRef(schema, name), body))


def run():
    setup_logging()
    try:
        check_connection()
    except psycopg2.Error as e:
        logger.error("%s%s", messages.DB_CONNECTION_ERROR, e)
        sys.exit(1)
    logger.info("PostgreSQL connectivity -> [OK]")

    logger.info("Registered routes:")
    for r in sorted([rule.rule for rule in app.url_map.iter_rules() if rule.endpoint != "static"]):
        logger.info("  %s", r)
    app.run(host=config.HTTP_HOST, port=config.HTTP_PORT, threaded=True)


if __name__ == "__main__":
    run()
