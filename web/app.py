"""
Web Interface for Class Extraction
JSON endpoints over the class extraction engine.
"""

import logging
import os
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from flask import Flask, jsonify, request

from core.class_extractor import ClassExtractor, extract_all_class_attributes
from core.config import configure_logging
from core.expression_parser import parse_expression

logger = logging.getLogger(__name__)

app = Flask(__name__)
extractor = ClassExtractor()


def _json_field(name: str):
    """String field from a JSON body, or None when absent or not a string."""
    payload = request.get_json(silent=True) or {}
    value = payload.get(name)
    return value if isinstance(value, str) else None


@app.route('/health')
def health():
    return jsonify({'status': 'ok'})


@app.route('/api/extract', methods=['POST'])
def extract():
    """Extract every class attribute from {"text": ...}."""
    text = _json_field('text')
    if text is None:
        return jsonify({'error': 'A JSON body with a "text" string is required'}), 400
    try:
        extractions = extract_all_class_attributes(text)
        return jsonify({'extractions': [e.to_dict() for e in extractions]})
    except Exception as e:
        logger.error(f"Error extracting classes: {str(e)}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@app.route('/api/parse', methods=['POST'])
def parse():
    """Parse one isolated expression from {"expression": ...}."""
    expression = _json_field('expression')
    if expression is None:
        return jsonify({'error': 'A JSON body with an "expression" string is required'}), 400
    try:
        parsed = parse_expression(expression)
        return jsonify({
            'matched': parsed is not None,
            'conditional_classes': [cc.to_dict() for cc in parsed or []],
        })
    except Exception as e:
        logger.error(f"Error parsing expression: {str(e)}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@app.route('/api/summary', methods=['POST'])
def summary():
    """Class usage summary for an uploaded `file` or a JSON {"text": ...} body."""
    try:
        if 'file' in request.files and request.files['file'].filename:
            text = request.files['file'].read().decode('utf-8')
        else:
            text = _json_field('text')
        if text is None:
            return jsonify({'error': 'Upload a "file" or send a JSON body with a "text" string'}), 400
        return jsonify(extractor.summarize(text))
    except UnicodeDecodeError:
        return jsonify({'error': 'Uploaded file is not valid UTF-8'}), 400
    except Exception as e:
        logger.error(f"Error summarizing classes: {str(e)}", exc_info=True)
        return jsonify({'error': str(e)}), 500


if __name__ == '__main__':
    configure_logging()
    port = int(os.environ.get("PORT", 5000))
    app.run(host='0.0.0.0', port=port)
