"""VulnLab — Deliberately misconfigured web server for WebRecon testing.

Every check category has something to find:

  * PUT / DELETE accepted on ``/``
  * HSTS, CSP and X-Frame-Options never sent
  * a session cookie without Secure / HttpOnly / SameSite
  * ``/.env`` readable, ``/admin`` redirecting to a login page
"""

from flask import Flask, Response, make_response, redirect

app = Flask(__name__)

_ENV_FILE = """APP_ENV=production
DB_PASSWORD=hunter2
SECRET_KEY=flag{env_f1l3_3xp0s3d}
"""

# ── Response headers ───────────────────────────────────────────

@app.after_request
def weak_headers(resp):
    """Send only the harmless headers; leave the important ones out."""
    resp.headers["X-Content-Type-Options"] = "nosniff"
    resp.headers["Cache-Control"] = "no-store"
    resp.headers["Server"] = "VulnLab/1.0"
    return resp


# ══════════════════════════════════════════════════════════════════
#  HOME — accepts dangerous verbs and sets an insecure cookie
# ══════════════════════════════════════════════════════════════════

@app.route("/", methods=["GET", "POST", "PUT", "DELETE"])
def home():
    resp = make_response("<h1>VulnLab</h1><p><a href=\"/login\">Login</a></p>")
    resp.headers.add("Set-Cookie", "sid=abc123; Path=/")
    resp.headers.add("Set-Cookie",
                     "prefs=dark; Path=/; Secure; HttpOnly; SameSite=Strict")
    return resp


# ══════════════════════════════════════════════════════════════════
#  Common resources
# ══════════════════════════════════════════════════════════════════

@app.route("/robots.txt")
def robots():
    return Response("User-agent: *\nDisallow: /admin\n", mimetype="text/plain")


@app.route("/login")
def login():
    return "<form method=post><input name=user><input name=pass></form>"


@app.route("/admin")
def admin():
    return redirect("/login")


@app.route("/.env")
def env_file():
    return Response(_ENV_FILE, mimetype="text/plain")


@app.route("/.git/HEAD")
def git_head():
    return Response("Forbidden", status=403)


@app.route("/phpinfo.php")
def phpinfo():
    return Response("Internal Server Error", status=500)


if __name__ == "__main__":
    print("[*] VulnLab running on http://127.0.0.1:5000")
    app.run(host="127.0.0.1", port=5000, debug=True)
