import os
from pgcheck import create_app

app = create_app()

if __name__ == '__main__':
    # Debug/reloader off by default; the reloader would start a second scheduler thread.
    debug_flag = os.environ.get('PGCHECK_DEBUG_SERVER', '0') == '1'
    routes = sorted({r.rule for r in app.url_map.iter_rules()})
    print(f"[pgcheck] Route count={len(routes)} routes={routes}")
    app.run(host=os.environ.get('PGCHECK_HOST', '127.0.0.1'),
            port=int(os.environ.get('PGCHECK_PORT', '5000')),
            debug=debug_flag, use_reloader=False)
