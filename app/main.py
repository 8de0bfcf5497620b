import sys
import os
import streamlit as st

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from core.transforms import load_seed
from core.service import CatalogService, CartService
from core.logger import get_logger
from Receipt_Service.receipt import cart_summary, format_price, format_receipt

log = get_logger("app")

SEED_PATH = os.getenv("SHOP_SEED", "data/seed.json")


# ============ Кэширование данных ============
@st.cache_data
def get_data():
    log.info("Loading seed from %s", SEED_PATH)
    return load_seed(SEED_PATH)


# ============ Инициализация ============
st.set_page_config(
    page_title="Shopping Cart Pricing",
    page_icon="🛒",
    layout="wide",
    initial_sidebar_state="expanded",
)

categories, products, campaigns, coupons, delivery = get_data()
catalog = CatalogService(categories, products, campaigns, coupons, delivery)

if "cart" not in st.session_state:
    st.session_state.cart = catalog.new_cart()


def describe_rule(rule) -> str:
    """Короткая подпись кампании или купона для виджетов"""
    amount = (
        f"{rule.discount:g}%"
        if rule.discount_type.value == "RATE"
        else format_price(rule.discount)
    )
    if hasattr(rule, "category"):
        return f"{rule.category.name}: -{amount} (> {rule.min_item_count} items)"
    return f"-{amount} from {format_price(rule.min_price_total)}"


# ============ HEADER ============
st.title("🛒 Shopping cart")
st.caption("Campaigns, coupon and delivery cost")

with st.sidebar:
    st.header("📂 Navigation")
    page = st.radio(
        "Section:",
        ["🏪 Catalog", "🛒 Cart", "🧾 Receipt"],
        label_visibility="collapsed",
    )

    st.divider()
    if st.button("🗑️ New cart", use_container_width=True):
        st.session_state.cart = catalog.new_cart()
        st.rerun()


# ============ PAGE: КАТАЛОГ ============
if page == "🏪 Catalog":
    st.header("🏪 Catalog")

    roots = [c.name for c in categories if c.parent is None]
    selected = st.selectbox("📂 Category", ["All"] + [c.name for c in categories])
    shown = products if selected == "All" else catalog.products_by_category(selected)

    st.info(f"🔍 Products: **{len(shown)}** | root categories: {', '.join(roots)}")
    st.divider()

    for p in shown:
        cols = st.columns([5, 2, 2, 2])
        with cols[0]:
            st.markdown(f"**{p.title}**")
            parent = catalog.parent_of(p.category.name).map(lambda c: f"{c.name} › ")
            st.caption(f"📂 {parent.get_or_else('')}{p.category.name}")
        with cols[1]:
            st.write(format_price(p.price))
        with cols[2]:
            qty = st.number_input(
                "Qty",
                min_value=1,
                value=1,
                key=f"qty_{p.title}",
                label_visibility="collapsed",
            )
        with cols[3]:
            if st.button("➕ Add", key=f"add_{p.title}"):
                st.session_state.cart.add_item(p, int(qty))
                st.success(f"✅ {p.title} × {qty}")


# ============ PAGE: КОРЗИНА ============
elif page == "🛒 Cart":
    st.header("🛒 Your cart")
    cart = st.session_state.cart

    if cart.is_empty():
        st.info("🛍️ The cart is empty. Go to the catalog!")
    else:
        for line in cart.lines():
            cols = st.columns([5, 2, 2])
            with cols[0]:
                st.write(f"**{line.product.title}**")
            with cols[1]:
                st.write(f"× {line.quantity}")
            with cols[2]:
                st.write(format_price(line.amount))

        st.divider()

        st.subheader("🏷️ Campaigns")
        applied = set(cart.campaigns)
        available = [c for c in campaigns if c not in applied]
        chosen = st.multiselect(
            "Apply campaigns", available, format_func=describe_rule
        )
        if st.button("Apply selected campaigns") and chosen:
            cart.apply_campaigns(*chosen)
            st.rerun()

        eligible = CartService(catalog, cart).eligible_campaigns()
        st.caption(
            "Would trigger now: "
            + (", ".join(describe_rule(c) for c in eligible) or "none")
        )

        st.subheader("🎟️ Coupon")
        coupon = st.selectbox("Coupon", coupons, format_func=describe_rule)
        if st.button("Apply coupon"):
            cart.apply_coupon(coupon)
            st.rerun()
        st.caption(
            "Applied: " + cart.coupon.map(describe_rule).get_or_else("no coupon")
        )

        st.divider()
        summary = cart_summary(cart)
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("💰 Total", format_price(summary["total_price"]))
        with col2:
            st.metric("🏷️ Campaigns", format_price(summary["campaign_discount"]))
        with col3:
            st.metric("🎟️ Coupon", format_price(summary["coupon_discount"]))
        with col4:
            st.metric("🚚 Delivery", format_price(summary["delivery_cost"]))

        st.markdown(f"### 💳 To pay: **{format_price(summary['final_price'])}**")


# ============ PAGE: ЧЕК ============
elif page == "🧾 Receipt":
    st.header("🧾 Receipt")
    st.code(format_receipt(st.session_state.cart), language=None)

    with st.expander("Category aggregates"):
        st.json(
            {
                name: {"items": a.item_count, "total": round(a.total_price, 2)}
                for name, a in st.session_state.cart.aggregates().items()
            }
        )
