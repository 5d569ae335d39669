import argparse
import logging

from flask import Flask, jsonify, render_template_string, request
from werkzeug.exceptions import RequestEntityTooLarge

from .config import Config
from .engine import ALGORITHMS, DESCRIPTIONS, transform

logger = logging.getLogger(__name__)

DEFAULT_MODE = 'encrypt'
DEFAULT_ALGORITHM = 'AES-256'

#==UI==
TEMPLATE = '''
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width,initial-scale=1">
  <title>Web Cipher</title>
  <style>
    body{font-family: system-ui, -apple-system, 'Segoe UI', Roboto, Arial; padding:20px; max-width:760px; margin:auto}
    textarea{width:100%; height:140px}
    input[type=text], select{width:100%; padding:6px}
    .row{display:flex; gap:20px}
    .col{flex:1}
    .panel{border:1px solid #ddd; padding:12px; border-radius:8px; margin-bottom:12px}
    label{font-weight:600}
    button{padding:8px 12px; border-radius:6px}
    .error{color:crimson}
    .note{color:#555; font-size:0.9em}
  </style>
</head>
<body>
  <h1>Web Cipher</h1>
  <p class="note">Encrypt or decrypt text using {{ algorithms|length }} classic &amp; modern ciphers.</p>
  <div class="panel">
    <form method="post" action="/" autocomplete="off">
      <label>Input Text</label>
      <textarea name="text" placeholder="Paste or type your message here...">{{ text }}</textarea>

      <div class="row">
        <div class="col">
          <label>Algorithm</label>
          <select name="algorithm" id="algorithm" required>
            {% for name in algorithms %}
            <option value="{{ name }}"{% if name == algorithm %} selected{% endif %}>{{ name }}</option>
            {% endfor %}
          </select>
          <p class="note" id="algoinfo">{{ descriptions.get(algorithm, '') }}</p>
        </div>
        <div class="col">
          <label>Key / Password</label>
          <input type="text" name="key" value="{{ key }}" placeholder="If needed">
        </div>
      </div>

      <button type="submit" name="mode" value="encrypt">Encrypt</button>
      <button type="submit" name="mode" value="decrypt">Decrypt</button>
    </form>
  </div>

  {% if result is not none %}
  <div class="panel">
    <label>Output ({{ algorithm }} {{ mode }}):</label>
    {% if error %}
      <p class="error">{{ result }}</p>
    {% else %}
      <textarea id="output" readonly>{{ result }}</textarea>
      <button type="button" id="copybtn" onclick="copyOutput()">Copy</button>
    {% endif %}
  </div>
  {% endif %}

  <script>
    const infos = {{ descriptions|tojson }};
    function copyOutput(){
      const out = document.getElementById('output');
      const btn = document.getElementById('copybtn');
      out.select();
      out.setSelectionRange(0, out.value.length);
      navigator.clipboard.writeText(out.value).then(function(){
        btn.textContent = 'Copied!';
        setTimeout(function(){ btn.textContent = 'Copy'; }, 1200);
      });
    }
    const select = document.getElementById('algorithm');
    select.addEventListener('change', function(){
      document.getElementById('algoinfo').textContent = infos[select.value] || '';
    });
  </script>
</body>
</html>
'''


def render_page(result=None, mode=DEFAULT_MODE, algorithm=DEFAULT_ALGORITHM, text='', key='', error=False):
    return render_template_string(TEMPLATE, result=result, mode=mode, algorithm=algorithm,
                                  text=text, key=key, error=error,
                                  algorithms=ALGORITHMS, descriptions=DESCRIPTIONS)


def read_fields(payload):
    def field(name, default):
        value = payload.get(name)
        return str(value) if value else default

    return (field('mode', DEFAULT_MODE), field('algorithm', DEFAULT_ALGORITHM),
            field('text', ''), field('key', ''))


def request_payload():
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form


def create_app(config=None):
    app = Flask(__name__)
    app.config.from_object(config or Config)

    @app.route('/')
    def index():
        return render_page()

    @app.route('/', methods=['POST'])
    def process():
        try:
            mode, algorithm, text, key = read_fields(request_payload())
            result = transform(mode, algorithm, text, key)
            return render_page(result, mode, algorithm, text, key)
        except RequestEntityTooLarge:
            raise
        except Exception:
            logger.exception('Form processing error')
            return render_page('Error processing request', error=True), 400

    @app.route('/api/transform', methods=['POST'])
    def api_transform():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({'error': 'JSON object body required'}), 400
        mode, algorithm, text, key = read_fields(payload)
        return jsonify({'algorithm': algorithm, 'mode': mode,
                        'result': transform(mode, algorithm, text, key)})

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(error):
        return render_page('Request body too large', error=True), 413

    return app


def main(argv=None):
    parser = argparse.ArgumentParser(description='Web Cipher: encrypt or decrypt text with 10 ciphers')
    parser.add_argument('--host', default=Config.HOST, help=f'Bind address (default: {Config.HOST})')
    parser.add_argument('--port', type=int, default=Config.PORT, help=f'Port (default: {Config.PORT})')
    parser.add_argument('--log-level', default=Config.LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], type=str.upper)
    parser.add_argument('--debug', action='store_true', help='Run Flask in debug mode')
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    app = create_app()
    logger.info('Web Cipher running at http://%s:%d', args.host, args.port)
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == '__main__':
    main()
