import sqlite3
import sys

db_path = sys.argv[1] if len(sys.argv) > 1 else "portal_local.db"
con = sqlite3.connect(db_path)
cur = con.cursor()

print("companies=", cur.execute("select count(1) from companies").fetchone()[0])
print("projects=", cur.execute("select count(1) from projects").fetchone()[0])
print("blocked_projects=", cur.execute("select count(1) from projects where is_blocked = 1").fetchone()[0])
print("updates=", cur.execute("select count(1) from updates").fetchone()[0])
print(
    "pending_deliverables=",
    cur.execute(
        "select count(1) from updates where is_deliverable = 1 and is_approved is null"
    ).fetchone()[0],
)
print(
    "tasks_by_status=",
    cur.execute("select status, count(1) from tasks group by status order by status").fetchall(),
)

con.close()
