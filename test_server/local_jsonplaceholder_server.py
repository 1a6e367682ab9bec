#!/usr/bin/env python3

from flask import Flask, request, jsonify
import argparse

app = Flask(__name__)

# In-memory posts, seeded like jsonplaceholder.typicode.com
POSTS = {
    i: {
        'userId': 1,
        'id': i,
        'title': f'post {i}',
        'body': f'body of post {i}',
    }
    for i in range(1, 6)
}

comments = []


@app.route('/posts/<int:post_id>', methods=['GET'])
def get_post(post_id):
    post = POSTS.get(post_id)
    if post is None:
        return jsonify({}), 404
    return jsonify(post)


@app.route('/posts/<int:post_id>', methods=['DELETE'])
def delete_post(post_id):
    # jsonplaceholder answers 200 with an empty object whether or not the post exists
    POSTS.pop(post_id, None)
    return jsonify({})


@app.route('/comments', methods=['POST'])
def create_comment():
    # The raw client sends its body without Content-Length, so it usually arrives empty
    comment = request.get_json(silent=True) or {}
    comment['id'] = 101 + len(comments)
    comments.append(comment)
    return jsonify(comment), 201


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Mock JSONPlaceholder server")
    parser.add_argument('--host', default='0.0.0.0')
    parser.add_argument('--port', type=int, default=80, help='The client always connects on port 80')
    args = parser.parse_args()

    print(f"Starting mock JSONPlaceholder server on http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=True)
