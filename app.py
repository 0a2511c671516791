import logging

from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.exceptions import MethodNotAllowed, NotFound, RequestEntityTooLarge

from bankstatementparser import config
from bankstatementparser.exceptions import StatementParserError
from bankstatementparser.extractor import StatementExtractor

logging.basicConfig(level=config.LOG_LEVEL, format='%(levelname)s | %(name)s | %(message)s')
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = config.MAX_UPLOAD_MB * 1024 * 1024
app.config['EXTRACTOR'] = StatementExtractor(config.layout_from_env())

# Wildcard origin on every response, preflights included
CORS(app, send_wildcard=True, methods=['POST', 'OPTIONS'], allow_headers=['Content-Type'])


@app.before_request
def answer_preflight():
  """Answer OPTIONS for any path with an empty body."""
  if request.method == 'OPTIONS':
    return app.response_class(status=200)
  return None


@app.route('/upload', methods=['POST'])
def upload_statement():
  file = request.files.get('file')
  if not file or file.mimetype != 'application/pdf':
    return jsonify({'error': 'Please upload a PDF file.'}), 400

  extractor = app.config['EXTRACTOR']
  try:
    transactions = extractor.extract(file.read())
  except StatementParserError as e:
    logger.error(f"Extraction failed for {file.filename}: {e}")
    return jsonify({'error': e.label, 'details': str(e)}), 500
  except Exception as e:
    logger.exception(f"Unexpected error while processing {file.filename}")
    return jsonify({'error': 'Error processing PDF.', 'details': str(e)}), 500

  logger.info(f"Parsed {len(transactions)} transactions from {file.filename}")
  return jsonify({'transactions': [t.to_dict() for t in transactions]})


@app.errorhandler(NotFound)
@app.errorhandler(MethodNotAllowed)
def not_found(e):
  return jsonify({'error': 'Not Found'}), 404


@app.errorhandler(RequestEntityTooLarge)
def too_large(e):
  return jsonify({
    'error': 'File too large.',
    'details': f'Uploads are limited to {config.MAX_UPLOAD_MB} MB',
  }), 413


if __name__ == '__main__':
  app.run(host=config.HOST, port=config.PORT)
