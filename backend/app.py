"""Local development server that forwards requests to the Lambda router."""
import logging
import os

from flask import Flask, Response, request

from lambda_function import HANDLERS, router


app = Flask(__name__)
logger = logging.getLogger(__name__)


def _request_to_event() -> dict:
    raw_uri = request.environ.get('RAW_URI') or request.environ.get('REQUEST_URI')
    path = raw_uri.split('?', 1)[0] if raw_uri else request.path
    return {
        'httpMethod': request.method,
        'path': path,
        'queryStringParameters': request.args.to_dict() or None,
        'headers': dict(request.headers),
    }


@app.route('/', defaults={'path': ''}, methods=['GET', 'OPTIONS'], provide_automatic_options=False)
@app.route('/<path:path>', methods=['GET', 'OPTIONS'], provide_automatic_options=False)
def avatar(path):
    """Serve every path through the same handlers the Lambda uses."""
    result = router.handle(_request_to_event(), HANDLERS)
    return Response(
        result.get('body', ''),
        status=result.get('statusCode', 200),
        headers=result.get('headers', {}),
    )


if __name__ == '__main__':
    port = int(os.environ.get('PORT', '5002'))
    logger.info("Serving avatars on http://localhost:%s/avatar/JD", port)
    app.run(debug=True, host='0.0.0.0', port=port, threaded=True)
