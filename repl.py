"""Interactive REPL for nwd. Attaches to a running WebDriver session, reads element commands from stdin."""
import argparse, asyncio, json, logging, sys, traceback

from nwd.core.contracts import Offset, SessionConfig, Timeouts
from nwd.core.element import WebElement
from nwd.core.session import WebDriverSession

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)
logger = logging.getLogger("nwd.repl")


def _dump(value):
    if isinstance(value, WebElement):
        return f"<element {value.id}>"
    if isinstance(value, list):
        return json.dumps([_dump(v) for v in value])
    return json.dumps(value)


async def main(config: SessionConfig):
    async with WebDriverSession(config) as driver:
        logger.info(f"[REPL] Attached to session {driver.session_id}")
        current = None

        while True:
            print("CMD>", flush=True)
            try:
                line = await asyncio.get_running_loop().run_in_executor(None, sys.stdin.readline)
                if not line:
                    break
                cmd = line.strip()
                if not cmd:
                    continue
                if cmd == "quit":
                    break

                parts = cmd.split(" ", 1)
                action = parts[0]
                args = parts[1] if len(parts) > 1 else ""

                if action == "navigate":
                    await driver.navigate(args)
                    print(f"RESULT: {args}", flush=True)

                elif action == "find":
                    # find <css>  (scoped to the current element when one is selected)
                    current = await (current.get(args) if current else driver.get(args))
                    print(f"ELEMENT: {current.id}", flush=True)

                elif action == "root":
                    current = None
                    print("ELEMENT: none", flush=True)

                elif action == "list":
                    found = await (current.get_list(args) if current else driver.get_list(args))
                    print(f"RESULT: {_dump(found)}", flush=True)

                elif current is None:
                    print("ERROR: no element selected, use find <selector>", flush=True)

                elif action == "click":
                    await current.click()
                    print("RESULT: clicked", flush=True)

                elif action == "type":
                    await current.send_keys(args)
                    print("RESULT: typed", flush=True)

                elif action == "fill":
                    await current.send_keys(args, clear=True)
                    print("RESULT: filled", flush=True)

                elif action == "hover":
                    # hover  OR  hover 10,5
                    if args:
                        x, y = (int(p) for p in args.split(","))
                        await current.move_to(Offset(x=x, y=y))
                    else:
                        await current.move_to()
                    print("RESULT: moved", flush=True)

                elif action == "text":
                    print(f"TEXT: {await current.get_text()}", flush=True)

                elif action == "attr":
                    print(f"RESULT: {_dump(await current.get_attr(args))}", flush=True)

                elif action == "css":
                    print(f"RESULT: {_dump(await current.css(args))}", flush=True)

                elif action == "visible":
                    print(f"RESULT: {_dump(await current.is_visible())}", flush=True)

                elif action == "disappear":
                    await current.wait_for_disappear()
                    print("RESULT: disappeared", flush=True)

                elif action == "detach":
                    await current.wait_for_detach()
                    current = None
                    print("RESULT: detached", flush=True)

                else:
                    print(f"ERROR: unknown command: {action}", flush=True)

            except Exception as e:
                traceback.print_exc()
                print(f"ERROR: {e}", flush=True)

    print("[DONE]", flush=True)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("session_id")
    parser.add_argument("--server-url", default=SessionConfig.server_url)
    parser.add_argument("--log-calls", action="store_true", help="log every element command at DEBUG")
    ns = parser.parse_args()
    if ns.log_calls:
        logging.getLogger("nwd.calls").setLevel(logging.DEBUG)
    asyncio.run(
        main(
            SessionConfig(
                server_url=ns.server_url,
                session_id=ns.session_id,
                timeouts=Timeouts.from_env(),
                log_method_calls=ns.log_calls,
            )
        )
    )
