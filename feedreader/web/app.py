from flask import Flask, jsonify

from feedreader.config.settings import load_config, WEB_HOST, WEB_PORT
from feedreader.core.feed_service import FeedService

app = Flask(__name__)
# Keep the envelope's key order on the wire
app.json.sort_keys = False

# Configuration is read once per process
feed_service = FeedService(load_config())

@app.route('/api/rss', methods=['GET'])
def get_rss():
    """Return the latest feed items, newest first.

    Failures are reported in the body's error field with a 200 status so
    clients can render an empty state without checking the status code.
    """
    result = feed_service.get_feed()
    return jsonify(result.to_dict())

if __name__ == '__main__':
    app.run(debug=True, host=WEB_HOST, port=WEB_PORT)
