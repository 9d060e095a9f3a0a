"""Renders the admin panel pages: product table and add-product form."""

import html

from product_admin.domain.page_state import ProductListing, ProductRow, RenderState
from product_admin.domain.product import UserError

_CSS = """
  * { box-sizing: border-box; margin: 0; padding: 0; }
  body { font-family: system-ui, sans-serif; background: #f4f6f9; color: #1a1a2e; padding: 2rem; }
  h1 { font-size: 1.6rem; margin-bottom: 1rem; }
  .top { display: flex; justify-content: space-between; align-items: center; margin-bottom: 1rem; }
  a.button, button { background: #4f46e5; color: #fff; border: none; border-radius: 6px;
                     padding: 0.5rem 1rem; font-size: 0.9rem; text-decoration: none; cursor: pointer; }
  a.back { color: #4f46e5; text-decoration: none; font-size: 0.9rem; }

  .card { background: #fff; border-radius: 8px; padding: 1.25rem 1.75rem;
          box-shadow: 0 1px 4px rgba(0,0,0,.08); margin-bottom: 1.5rem; }

  table { width: 100%; border-collapse: collapse; background: #fff;
          border-radius: 8px; overflow: hidden;
          box-shadow: 0 1px 4px rgba(0,0,0,.08); margin-bottom: 2rem; }
  th { background: #4f46e5; color: #fff; text-align: left;
       padding: 0.65rem 1rem; font-size: 0.8rem; text-transform: uppercase;
       letter-spacing: .04em; }
  td { padding: 0.6rem 1rem; font-size: 0.88rem; border-bottom: 1px solid #f0f0f0; }
  td.num { text-align: right; }
  tr:last-child td { border-bottom: none; }
  tr:hover td { background: #f9f9ff; }
  img.thumb { width: 40px; height: 40px; object-fit: cover; border-radius: 4px; background: #eee; }
  .subdued { color: #888; font-size: 0.8rem; }

  .badge { display: inline-block; padding: 2px 8px; border-radius: 99px;
           font-size: 0.75rem; font-weight: 600; }
  .badge-active { background: #d1fae5; color: #065f46; }
  .badge-draft { background: #fef3c7; color: #92400e; }
  .badge-archived { background: #e5e7eb; color: #374151; }

  .banner { background: #fee2e2; color: #991b1b; border-radius: 8px;
            padding: 0.75rem 1rem; margin-bottom: 1rem; }
  .banner ul { margin-left: 1.25rem; }

  form label { display: block; font-size: 0.85rem; font-weight: 600; margin: 0.75rem 0 0.25rem; }
  form input, form textarea, form select { width: 100%; padding: 0.45rem 0.6rem;
           border: 1px solid #d1d5db; border-radius: 6px; font-size: 0.9rem; }
  .group { display: flex; gap: 1rem; }
  .group > div { flex: 1; }
  form button { margin-top: 1.25rem; }
"""

_STATUS_OPTIONS = (("ACTIVE", "Active"), ("DRAFT", "Draft"))


def _page(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{html.escape(title)}</title>
  <style>{_CSS}</style>
</head>
<body>
{body}
</body>
</html>"""


def _badge(status: str) -> str:
    cls = f"badge-{status.lower()}"
    if cls not in ("badge-active", "badge-draft", "badge-archived"):
        cls = ""
    return f'<span class="badge {cls}">{html.escape(status.lower())}</span>'


def _thumbnail(row: ProductRow) -> str:
    src = html.escape(row.item.image_url or "")
    alt = html.escape(row.item.image_alt or row.item.title)
    return f'<img class="thumb" src="{src}" alt="{alt}">'


def _inventory(row: ProductRow) -> str:
    inventory = row.item.total_inventory
    return "" if inventory is None else str(inventory)


def _products_table(rows: list[ProductRow]) -> str:
    body = "".join(
        f"""<tr>
          <td>{_thumbnail(r)}</td>
          <td><strong>{html.escape(r.item.title)}</strong><br>
              <span class="subdued">{html.escape(r.summary)}</span></td>
          <td class="num">{html.escape(r.formatted_price)}</td>
          <td>{_badge(r.item.status)}</td>
          <td class="num">{_inventory(r)}</td>
        </tr>"""
        for r in rows
    )
    return f"""
    <table>
      <thead><tr>
        <th>Image</th><th>Product Details</th><th>Price</th>
        <th>Status</th><th>Inventory</th>
      </tr></thead>
      <tbody>{body}</tbody>
    </table>"""


def render_product_list_page(listing: ProductListing) -> str:
    """Return the full products page for ``listing``."""
    if listing.error:
        content = f'<div class="banner">Error: {html.escape(listing.error)}</div>'
    else:
        content = _products_table(listing.rows)
    return _page(
        "Products",
        f"""  <div class="top">
    <h1>Products</h1>
    <a class="button" href="/app/products/new">Add product</a>
  </div>
  {content}""",
    )


def _error_banner(errors: list[UserError]) -> str:
    if not errors:
        return ""
    items = "".join(
        f"<li>{html.escape(e.field + ': ') if e.field else ''}{html.escape(e.message)}</li>"
        for e in errors
    )
    return f'<div class="banner"><ul>{items}</ul></div>'


def _text_input(name: str, label: str, values: dict[str, str], **attrs: str) -> str:
    extra = "".join(f' {k}="{html.escape(v)}"' for k, v in attrs.items())
    value = html.escape(values.get(name, ""))
    return (
        f'<label for="{name}">{label}</label>'
        f'<input id="{name}" name="{name}" value="{value}"{extra}>'
    )


def _status_select(selected: str) -> str:
    options = "".join(
        f'<option value="{value}"{" selected" if value == selected else ""}>{label}</option>'
        for value, label in _STATUS_OPTIONS
    )
    return f'<label for="status">Status</label><select id="status" name="status">{options}</select>'


def render_new_product_page(state: RenderState | None = None) -> str:
    """Return the add-product form, pre-filled from ``state`` after a failure."""
    state = state or RenderState()
    values = state.values
    description = html.escape(values.get("description", ""))
    title = _text_input("title", "Title", values, type="text", required="required", autocomplete="off")
    vendor = _text_input("vendor", "Vendor", values, type="text")
    product_type = _text_input("productType", "Product Type", values, type="text")
    price = _text_input("price", "Price ($)", values, type="number", step="0.01", required="required")
    inventory = _text_input("inventory", "Inventory", values, type="number")
    tags = _text_input("tags", "Tags (comma separated)", values, type="text")
    option_name = _text_input("optionName", "Option name", values, type="text")
    option_values = _text_input(
        "optionValues", "Option values (comma separated)", values, type="text"
    )
    status = _status_select((values.get("status") or "DRAFT").upper())

    return _page(
        "Add New Product",
        f"""  <a class="back" href="/app/products">&larr; Products</a>
  <h1>Add New Product</h1>
  <div class="card">
    {_error_banner(state.errors)}
    <form method="post" action="/app/products/new">
      {title}
      <label for="description">Description</label>
      <textarea id="description" name="description" rows="4">{description}</textarea>
      <div class="group">
        <div>{vendor}</div>
        <div>{product_type}</div>
      </div>
      <div class="group">
        <div>{price}</div>
        <div>{inventory}</div>
      </div>
      {tags}
      <div class="group">
        <div>{option_name}</div>
        <div>{option_values}</div>
      </div>
      {status}
      <button type="submit">Add Product</button>
    </form>
  </div>""",
    )
