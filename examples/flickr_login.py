"""Flickr desktop login walkthrough.

Obtains a frob, sends the user to the signed login page, trades the frob
for a token and makes an authenticated call with it.

Usage:
    FLICKR_API_KEY=... FLICKR_SECRET=... python examples/flickr_login.py
"""

import os

from restproxy import build_login_url, flickr_proxy_new


def main() -> None:
    with flickr_proxy_new(os.environ["FLICKR_API_KEY"], os.environ["FLICKR_SECRET"]) as proxy:
        call = proxy.new_call()
        call.set_function("flickr.auth.getFrob")
        call.set_params(format="json", nojsoncallback=1)
        call.sync()
        frob = call.json()["frob"]["_content"]

        input(f"Hit enter after authenticating at: {build_login_url(proxy, frob)}")

        call = proxy.new_call()
        call.set_function("flickr.auth.getToken")
        call.set_params(frob=frob, format="json", nojsoncallback=1)
        call.sync()
        proxy.set_token(call.json()["auth"]["token"]["_content"])

        call = proxy.new_call()
        call.set_function("flickr.test.login")
        call.set_params(format="json", nojsoncallback=1)
        call.sync()
        print(call.status_code, call.text)


if __name__ == "__main__":
    main()
