from __future__ import annotations

from pydantic import BaseModel, Field
from toon_tabular import compare_sizes, json_to_toon, serialize

source = '''
{
  "team": "platform",
  "tags": ["infra", "oncall", "k8s"],
  "users": [
    {"id": 1, "name": "Alice", "role": "admin", "active": true},
    {"id": 2, "name": "Bob", "role": "developer", "active": true},
    {"id": 3, "name": "Kim, Minsu", "role": "designer", "active": false}
  ],
  "history": [
    {"version": "1.0", "notes": {"breaking": false}},
    {"version": "2.0", "notes": {"breaking": true}}
  ]
}
'''.strip()

toon = json_to_toon(source)
print(toon)
print()
print(compare_sizes(source, toon))


class Server(BaseModel):
    host: str = Field(..., description="호스트 이름")
    port: int
    healthy: bool = True


print()
print(serialize({"servers": [Server(host="a.internal", port=80), Server(host="b.internal", port=8080)]}))
