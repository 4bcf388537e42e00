"""Hello World — the simplest perch mux.

Demonstrates static routes, typed path variables, return-value
content negotiation, and custom fallbacks.

Run:
    python app.py
"""

from perch import UNCASTABLE, Mux, Request, Response, get_request

mux = Mux()


@mux.route("/")
def index(request: Request):
    return "Hello, World!"


@mux.route("/greet/{name}")
def greet(request: Request):
    return f"Hello, {mux.variable_by_name('name', request)}!"


@mux.route("/items/{id:uint32}/page/{page:uint8}")
def item_page(request: Request):
    item_id, page = mux.variables_for(request)
    if UNCASTABLE in (item_id, page):
        return mux.dispatch_fallback(400, request), 400
    return {"id": item_id, "page": page}


@mux.route("/custom")
def custom(request: Request):
    return Response("Created").with_status(201).with_header("X-Custom", "perch")


@mux.fallback(400)
def bad_request(request: Request):
    return f"Bad path variables in {request.path}"


@mux.fallback(404)
def not_found(*_context):
    return f"Nothing at {get_request().path}"


if __name__ == "__main__":
    mux.run()
