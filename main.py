import logging
import os
import sys

from dotenv import load_dotenv
from flask import Flask, current_app, jsonify, request

from coactivo.config import Config
from coactivo.errors import CaseProcessingError
from coactivo.models import CaseRequest
from coactivo.services.case_processor import build_processor

# Load environment variables before any configuration is read
load_dotenv()

logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'INFO').upper(),
    stream=sys.stdout,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
for noisy in ("httpx", "httpcore", "urllib3", "openai"):
    logging.getLogger(noisy).setLevel(logging.WARNING)

logger = logging.getLogger("coactivo")

app = Flask(__name__)
app.config['CASE_PROCESSOR'] = None


def get_processor():
    """Return the app's case processor, building it from the environment on first use."""
    processor = current_app.config.get('CASE_PROCESSOR')
    if processor is None:
        processor = build_processor(Config.from_env())
        current_app.config['CASE_PROCESSOR'] = processor
        logger.info("Case processor initialized")
    return processor


@app.route('/health')
def health():
    return jsonify({'status': 'ok'})


@app.route('/process', methods=['POST'])
def process_case():
    """Process a stored case file and generate its legal document."""
    payload = request.get_json(silent=True)
    try:
        case_request = CaseRequest.from_payload(payload)
    except ValueError as e:
        logger.warning(f"Rejected request: {e}")
        return jsonify({'ok': False, 'error': str(e)}), 400

    logger.info(f"Processing case {case_request.case_id}: file={case_request.file_path}")

    try:
        result = get_processor().process(case_request)
    except CaseProcessingError as e:
        logger.error(
            f"Case {case_request.case_id} failed at {e.stage}: {type(e).__name__} - {e}",
            exc_info=True,
        )
        return jsonify({'ok': False, 'error': str(e)}), 500
    except Exception as e:
        logger.exception(f"Unexpected error processing case {case_request.case_id}")
        return jsonify({'ok': False, 'error': str(e) or type(e).__name__}), 500

    logger.info(f"Document uploaded for case {case_request.case_id}: {result.document_url}")
    return jsonify({
        'ok': True,
        'analysis': result.analysis.to_dict(),
        'document_url': result.document_url,
    })


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', '3000')))
