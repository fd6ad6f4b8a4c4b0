#!/usr/bin/env python3.11
"""
QR Code Grid Decoder Web App
Run: python3.11 qr_web.py
Visit: http://<your-ip>:8080
"""

import cv2
import numpy as np
from flask import Flask, request, jsonify, render_template_string

from qr_decode import decode_grid, unmask_grid
from qr_sample import grid_from_image
from qr_tables import total_codewords

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024

PORT = 8080

CODEWORD_COLORS = ['#e65050', '#f0a050', '#e6d23c', '#78c85a', '#50bec8',
                   '#4682dc', '#965ac8', '#c85a96', '#8c8c8c', '#aa6e3c']

HTML = '''
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>QR Grid Decoder</title>
    <style>
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
               background: #1a1a2e; color: #fff; padding: 20px; }
        .container { max-width: 640px; margin: 0 auto; }
        textarea { width: 100%; height: 160px; font-family: monospace; }
        .btn { padding: 10px 20px; border: none; border-radius: 8px; font-size: 15px;
               background: #4CAF50; color: #fff; cursor: pointer; margin: 8px 0; }
        #result { background: rgba(255,255,255,0.1); border-radius: 8px; padding: 14px;
                  white-space: pre-wrap; word-break: break-all; }
        #table { margin-top: 16px; background: #fff; display: inline-block; }
    </style>
</head>
<body>
    <div class="container">
        <h1>QR Grid Decoder</h1>
        <p>Upload a rendered QR image or paste the module grid as JSON (list of rows of 0/1).</p>
        <input type="file" id="imageInput" accept="image/*">
        <textarea id="gridInput" placeholder="[[1,1,1,1,1,1,1,0,...], ...]"></textarea>
        <button class="btn" onclick="decodeGrid()">Decode grid</button>
        <button class="btn" onclick="showTable()">Show codewords</button>
        <div id="result"></div>
        <div id="table"></div>
    </div>
    <script>
        const result = document.getElementById('result');
        document.getElementById('imageInput').onchange = (e) => {
            if (!e.target.files.length) return;
            const formData = new FormData();
            formData.append('image', e.target.files[0]);
            fetch('/decode', { method: 'POST', body: formData }).then(r => r.json()).then(show);
        };
        function gridBody() {
            return JSON.stringify({ grid: JSON.parse(document.getElementById('gridInput').value) });
        }
        function decodeGrid() {
            fetch('/decode', { method: 'POST', headers: { 'Content-Type': 'application/json' }, body: gridBody() })
                .then(r => r.json()).then(show);
        }
        function showTable() {
            fetch('/table', { method: 'POST', headers: { 'Content-Type': 'application/json' }, body: gridBody() })
                .then(r => r.text()).then(html => document.getElementById('table').innerHTML = html);
        }
        function show(data) {
            result.textContent = data.success ? JSON.stringify(data.result, null, 2) : 'Error: ' + data.error;
        }
    </script>
</body>
</html>
'''

TABLE = '''
<table style="border-collapse: collapse;">
{% for row in cells %}<tr>{% for color in row %}<td style="width:20px;height:20px;padding:0;background:{{ color }}"></td>{% endfor %}</tr>
{% endfor %}</table>
<p>Version {{ result.version }} ({{ result.size }}x{{ result.size }}), EC {{ result.level.name }}, mask {{ result.mask_index }},
{{ result.mode.label }} mode, length {{ result.length }}: <b>{{ result.message }}</b></p>
'''


def _shade(color, dark):
    if not dark:
        return color
    r, g, b = (int(color[i:i+2], 16) for i in (1, 3, 5))
    return f"#{int(r * 0.45):02x}{int(g * 0.45):02x}{int(b * 0.45):02x}"


def table_cells(grid):
    """Cell colours: data modules by physical codeword, function modules grey."""
    layout, _, _, unmasked = unmask_grid(grid)
    size = layout.size
    cells = [['#000' if grid[r][c] else '#ddd' for c in range(size)] for r in range(size)]
    num_codewords = total_codewords(layout.version)
    for n, (r, c) in enumerate(layout.data_coordinates):
        i = n // 8
        color = CODEWORD_COLORS[(3 * i) % 10] if i < num_codewords else '#ffffff'
        cells[r][c] = _shade(color, unmasked[r, c])
    return cells


def _request_grid():
    if 'image' in request.files:
        file = request.files['image']
        if file.filename == '':
            raise ValueError('No file selected')
        image = cv2.imdecode(np.frombuffer(file.read(), np.uint8), cv2.IMREAD_COLOR)
        if image is None:
            raise ValueError('Cannot read uploaded image')
        return grid_from_image(image), False
    body = request.get_json(silent=True)
    if not isinstance(body, dict) or 'grid' not in body:
        raise ValueError('No image uploaded or grid given')
    return body['grid'], bool(body.get('allow_truncated'))


@app.route('/')
def index():
    return render_template_string(HTML)


@app.route('/decode', methods=['POST'])
def decode():
    try:
        grid, allow_truncated = _request_grid()
        result = decode_grid(grid, allow_truncated=allow_truncated)
        print(f"[DECODE] v{result.version} {result.level.name} mask {result.mask_index}: {result.message[:60]}", flush=True)
        return jsonify({'success': True, 'result': result.as_dict()})
    except Exception as e:
        print(f"[DECODE] Error: {e}", flush=True)
        return jsonify({'success': False, 'error': str(e)})


@app.route('/table', methods=['POST'])
def table():
    try:
        grid, allow_truncated = _request_grid()
        result = decode_grid(grid, allow_truncated=allow_truncated)
        return render_template_string(TABLE, cells=table_cells(np.asarray(grid)), result=result)
    except Exception as e:
        print(f"[TABLE] Error: {e}", flush=True)
        return render_template_string("<p>Error: {{ error }}</p>", error=str(e)), 400


if __name__ == '__main__':
    import socket

    # Get local IP
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(('8.8.8.8', 80))
        ip = s.getsockname()[0]
    except OSError:
        ip = '127.0.0.1'
    finally:
        s.close()

    print("=" * 50)
    print("QR Grid Decoder Web App")
    print("=" * 50)
    print(f"\nVisit: http://{ip}:{PORT}")
    print(f"Or on this computer: http://localhost:{PORT}")
    print("\nPress Ctrl+C to stop\n")

    app.run(host='0.0.0.0', port=PORT, debug=False)
