"""
citemachine/app.py

Flask application for the APA citation machine.

Routes:
    POST /api/fetch-meta  - scrape a web page to prefill the citation form
    POST /api/generate    - format a reference + in-text citation

Run with:  python app.py
"""

from typing import Optional

from flask import Flask, request, jsonify

from config import AppConfig
from engines.base import FetchError
from engines.generic_url import GenericURLEngine
from formatters.apa import build_citation


def create_app(config: Optional[AppConfig] = None) -> Flask:
    """
    Build the Flask app.

    Args:
        config: Settings for the app and its URL engine; read from the
            environment when omitted
    """
    config = config or AppConfig.from_env()

    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = 1 * 1024 * 1024  # JSON bodies only

    # =========================================================================
    # CORS
    # =========================================================================

    @app.after_request
    def add_cors_headers(response):
        response.headers['Access-Control-Allow-Origin'] = config.cors_origin
        response.headers['Access-Control-Allow-Headers'] = 'Content-Type'
        response.headers['Access-Control-Allow-Methods'] = 'POST, OPTIONS'
        return response

    # =========================================================================
    # ROUTES
    # =========================================================================

    @app.route('/api/fetch-meta', methods=['POST', 'OPTIONS'])
    def fetch_meta():
        """
        Scrape citation metadata from a web page.

        Request JSON:
        {
            "url": "https://example.com/article"
        }

        Response JSON:
        {
            "ok": true,
            "meta": {"title": ..., "author": ..., "year": ..., "month": ...,
                     "day": ..., "siteName": ..., "url": ...}
        }
        """
        if request.method == 'OPTIONS':
            return '', 200

        data = request.get_json(silent=True)
        url = data.get('url') if isinstance(data, dict) else None

        if not isinstance(url, str) or not url.strip():
            return jsonify({
                'ok': False,
                'error': 'Missing URL'
            }), 400

        try:
            with GenericURLEngine(config) as engine:
                meta = engine.fetch_by_url(url)

            return jsonify({
                'ok': True,
                'meta': meta.to_dict()
            })

        except FetchError as e:
            print(f"[API] Fetch failed for {url}: {e}")
            return jsonify({
                'ok': False,
                'error': str(e)
            }), e.status_code

        except Exception as e:
            print(f"[API] Error in /api/fetch-meta: {e}")
            import traceback
            traceback.print_exc()
            return jsonify({
                'ok': False,
                'error': 'Could not read that page - fill in fields manually'
            }), 500

    @app.route('/api/generate', methods=['POST', 'OPTIONS'])
    def generate():
        """
        Format an APA 7 reference from user-confirmed fields.

        Request JSON:
        {
            "sourceType": "journal",
            "authors": "Jane Doe; John Smith",
            "year": "2020",
            "title": "A study of things",
            "journal": "Journal of Things",
            "volume": "5", "issue": "2", "pages": "10-20",
            "doi": "10.1234/abcd"
        }

        Response JSON:
        {
            "ok": true,
            "reference": "Doe, J., & Smith, J. (2020). A study of things. ...",
            "inText": "(Doe & Smith, 2020)"
        }
        """
        if request.method == 'OPTIONS':
            return '', 200

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({
                'ok': False,
                'error': 'Request body must be a JSON object'
            }), 400

        result = build_citation(data)

        return jsonify({
            'ok': True,
            **result.to_dict()
        })

    return app


if __name__ == '__main__':
    settings = AppConfig.from_env()
    print(f"[API] APA citation machine on http://{settings.host}:{settings.port}")
    create_app(settings).run(host=settings.host, port=settings.port)
