import qrcode
import io
import base64


def gerar_qr_code(payload: str) -> qrcode.QRCode:
    """
    Monta o QR Code a partir do PIX copia e cola, sem alterar o conteúdo
    """
    qr = qrcode.QRCode(box_size=8, border=2)
    qr.add_data(payload)
    qr.make(fit=True)
    return qr


def gerar_qr_code_data_url(payload: str) -> str:
    """
    Renderiza o QR Code como PNG em data URL (data:image/png;base64,...)
    """
    img = gerar_qr_code(payload).make_image(fill_color="black", back_color="white")

    buffered = io.BytesIO()
    img.save(buffered, "PNG")
    qr_b64 = base64.b64encode(buffered.getvalue()).decode("ascii")
    return f"data:image/png;base64,{qr_b64}"
