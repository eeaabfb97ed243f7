from types import SimpleNamespace

from notifications.rendering import OrderEmailContext, TemplateEmailRenderer


def _ctx(status="PENDING"):
    order = SimpleNamespace(
        external_order_id="ORD-7", item_summary="1x Lamp", delivery_address="9 Elm Rd", current_status=status,
    )
    return OrderEmailContext.from_order(order)


def test_tracking_activated_mentions_order_details():
    html = TemplateEmailRenderer().render_tracking_activated(_ctx())
    assert "ORD-7" in html
    assert "1x Lamp" in html
    assert "9 Elm Rd" in html
    assert "PENDING" in html


def test_status_update_label_and_note():
    html = TemplateEmailRenderer().render_status_update(_ctx("OUT_FOR_DELIVERY"), "OUT_FOR_DELIVERY", "Driver nearby")
    assert "OUT FOR DELIVERY" in html
    assert "📦" in html
    assert "Driver nearby" in html


def test_status_update_without_note():
    html = TemplateEmailRenderer().render_status_update(_ctx(), "DELIVERED")
    assert "Note:" not in html


def test_note_is_escaped():
    html = TemplateEmailRenderer().render_status_update(_ctx(), "DELIVERED", "<script>x</script>")
    assert "<script>" not in html
