# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Dumps the text of a generated CV page by page.
pip install pypdf
"""

import sys

from pypdf import PdfReader

def inspect(path):
    print(f"--- Inspecting: {path} ---")
    reader = PdfReader(path)

    print("\n[METADATA]")
    print(f"  Title: {reader.metadata.title if reader.metadata else None}")
    print(f"  Pages: {len(reader.pages)}")

    for i, page in enumerate(reader.pages, start=1):
        print(f"\n[PAGE {i}]")
        for line in page.extract_text().splitlines():
            if line.strip():
                print(f"  {line}")

if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python scripts/inspect_pdf.py <generated.pdf>")
        sys.exit(1)
    inspect(sys.argv[1])
