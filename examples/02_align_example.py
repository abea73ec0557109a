from __future__ import annotations

from toon_tabular import ToonDocument, align_buffer, shrink_text

document = '''
users[3]{id,name,role,active}:
  1,Alice,admin,true
  2,Bob,developer,true
  3,Charlie,designer,false
products[2|]{sku|title}:
  A-1|"Desk, oak"
  B-22|Lamp
'''.strip()

doc = ToonDocument.from_text(document)
report = align_buffer(doc)

print(doc.text)
print(report)
print()
print(shrink_text(doc.text))
