"""
scoped_store — Hello World

Every key carries a permission. Paths are colon-delimited and each
segment is checked by the store that owns it.
"""

from scoped_store import AccessDeniedError, AdminStore, Store


def main():
    # ──────────────────────────────────────
    #  1. A plain store is read-write by default
    # ──────────────────────────────────────
    user = Store()
    user.write_entries({"name": "Jane", "profile": {"email": "jane@acme.com"}})
    user.write("profile:address:city", "Lisbon")  # intermediate stores are created
    print("user entries:", user.entries())

    # ──────────────────────────────────────
    #  2. The admin view opens only what it declares
    # ──────────────────────────────────────
    admin = AdminStore(user=user)

    print("admin -> user:profile:email =", admin.read("user:profile:email"))
    print("admin -> getCredentials:username =", admin.read("getCredentials:username"))

    for path in ("name", "anything"):
        try:
            admin.read(path)
        except AccessDeniedError as e:
            print(f"  [DENIED] {e}")

    # Producers are not invoked by entries()
    print("admin entries:", admin.entries())


if __name__ == "__main__":
    main()
